"""Cart line items, operation results and the cached cart format."""
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from cartsync import config
from cartsync.errors import CartError
from cartsync.i18n import get_text
from cartsync.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class MalformedCartError(ValueError):
    """Raised when the cached cart cannot be parsed."""


# Ordered, unique by product_id; always replaced, never mutated
CartItems = Tuple["LineItem", ...]

EMPTY_CART: CartItems = ()


@dataclass(frozen=True)
class LineItem:
    """One product in the cart."""
    product_id: int
    amount: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.amount < 1:
            raise ValueError("amount must be >= 1 while the item is in the cart")

    def with_amount(self, amount: int) -> "LineItem":
        """Copy of this item with a new amount."""
        return replace(self, amount=amount)

    def to_dict(self) -> dict:
        """Cached form: product fields plus id and amount."""
        return {**self.metadata, "id": self.product_id, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from the cached form."""
        product_id = data["id"]
        amount = data["amount"]
        # bool is an int subclass; reject it explicitly
        if not isinstance(product_id, int) or isinstance(product_id, bool):
            raise TypeError("id must be an integer")
        if not isinstance(amount, int) or isinstance(amount, bool):
            raise TypeError("amount must be an integer")
        metadata = {k: v for k, v in data.items() if k not in ("id", "amount")}
        return cls(product_id=product_id, amount=amount, metadata=metadata)


def find_item(cart: CartItems, product_id: int) -> Optional[int]:
    """Index of the item for product_id, or None."""
    return next(
        (index for index, item in enumerate(cart) if item.product_id == product_id),
        None,
    )


def serialize_cart(cart: CartItems) -> str:
    """Serialize the cart to the JSON array kept in the durable slot."""
    return json.dumps([item.to_dict() for item in cart])


def parse_cart(raw: Optional[str]) -> CartItems:
    """
    Parse a cached cart.

    Repeated ids keep their first occurrence so the uniqueness of
    product ids holds on load.

    Raises:
        MalformedCartError: If raw is not a JSON array of valid line items
    """
    if not raw:
        return EMPTY_CART

    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise TypeError(f"expected a list, got {type(data).__name__}")
        items = [LineItem.from_dict(entry) for entry in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise MalformedCartError(
            f"{e}: {sanitize_string_for_logging(raw)}"
        ) from e

    seen: set[int] = set()
    unique = []
    for item in items:
        if item.product_id in seen:
            logger.warning(f"Dropping duplicate cached entry for product {item.product_id}")
            continue
        seen.add(item.product_id)
        unique.append(item)
    return tuple(unique)


@dataclass(frozen=True)
class CartResult:
    """Outcome of a cart operation."""
    ok: bool
    error: Optional[CartError] = None
    message_key: Optional[str] = None

    @classmethod
    def success(cls) -> "CartResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: CartError, message_key: str) -> "CartResult":
        return cls(ok=False, error=error, message_key=message_key)

    def message(self, lang: Optional[str] = None) -> Optional[str]:
        """User-facing text for a failure (CART_LANGUAGE by default), None on success."""
        if self.message_key is None:
            return None
        return get_text(self.message_key, lang or config.CART_LANGUAGE)

    def __bool__(self) -> bool:
        return self.ok
