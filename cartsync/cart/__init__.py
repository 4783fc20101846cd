"""Cart package: line items, durable storage, and the cart store."""
from .models import CartResult, LineItem, MalformedCartError, parse_cart, serialize_cart
from .service import CartStore
from .storage import CartStorage

__all__ = [
    "CartResult",
    "CartStore",
    "CartStorage",
    "LineItem",
    "MalformedCartError",
    "parse_cart",
    "serialize_cart",
]
