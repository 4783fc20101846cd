"""Cart store: stock-checked cart operations mirrored to a durable slot."""
import asyncio
from types import MappingProxyType
from typing import Mapping, Optional

from cartsync.db import RedisKeys
from cartsync.errors import (
    CartError,
    CartStorageError,
    MSG_ADD_FAILED,
    MSG_CLEAR_FAILED,
    MSG_OUT_OF_STOCK,
    MSG_PRODUCT_NOT_FOUND,
    MSG_REMOVE_FAILED,
    MSG_UPDATE_FAILED,
)
from cartsync.logging import get_logger
from .models import (
    EMPTY_CART,
    CartItems,
    CartResult,
    LineItem,
    MalformedCartError,
    find_item,
    parse_cart,
    serialize_cart,
)
from .protocols import CartStorageProtocol, StockReaderProtocol

logger = get_logger(__name__)

StockSnapshot = Mapping[int, int]


class CartStore:
    """
    Owns the cart and the last known stock snapshot.

    Every commit installs a new cart tuple; the sync cycle mirrors the cart
    to storage when it is not the tuple mirrored last, and schedules a stock
    refresh when the snapshot is not the one observed last. Both checks are
    identity checks, so mutating a held value in place is invisible to them.

    Operations are not serialized against each other. Two overlapping calls
    each read the cart at their start and the later commit wins.

    Usage:
        store = CartStore(StockApiClient(), CartStorage())
        await store.load()
        result = await store.add_product(3)
        if not result:
            show_error(result.message("pt"))
    """

    def __init__(
        self,
        reader: StockReaderProtocol,
        storage: CartStorageProtocol,
        storage_key: Optional[str] = None,
    ):
        self.reader = reader
        self.storage = storage
        self.storage_key = storage_key or RedisKeys.CART

        self._cart: CartItems = EMPTY_CART
        self._mirrored_cart: Optional[CartItems] = None
        self._stock: StockSnapshot = MappingProxyType({})
        self._observed_stock: Optional[StockSnapshot] = None
        self._refresh_tasks: set[asyncio.Task] = set()

    # ==================== Read-only views ====================

    @property
    def cart(self) -> CartItems:
        return self._cart

    @property
    def stock(self) -> StockSnapshot:
        return self._stock

    @property
    def total_items(self) -> int:
        """Sum of amounts over all line items."""
        return sum(item.amount for item in self._cart)

    def get_cart_summary(self) -> dict:
        """Plain-dict view of the cart for callers that render it."""
        cart = self._cart
        return {
            "is_empty": not cart,
            "total_items": sum(item.amount for item in cart),
            "items": [
                {
                    "product_id": item.product_id,
                    "amount": item.amount,
                    "metadata": dict(item.metadata),
                }
                for item in cart
            ],
        }

    # ==================== Lifecycle ====================

    async def load(self) -> CartItems:
        """
        Read the cached cart once and start the first stock refresh.

        An unreadable or malformed cached value gives an empty cart; a
        malformed one is overwritten with the empty cart.
        """
        healthy = True
        try:
            raw = await self.storage.read_raw(self.storage_key)
        except CartStorageError as e:
            logger.warning(f"Cart cache unreadable, starting empty: {e}")
            raw = None

        try:
            cart = parse_cart(raw)
        except MalformedCartError as e:
            logger.warning(f"Ignoring malformed cached cart: {e}")
            cart = EMPTY_CART
            healthy = False

        self._cart = cart
        self._mirrored_cart = cart if healthy else None

        try:
            await self._mirror()
        except CartStorageError as e:
            logger.warning(f"Could not overwrite malformed cached cart: {e}")
        self._refresh_if_stale()

        logger.info(f"Cart loaded with {len(cart)} line item(s)")
        return cart

    async def wait_for_refresh(self) -> None:
        """Wait for scheduled background stock refreshes to finish."""
        while self._refresh_tasks:
            await asyncio.gather(*list(self._refresh_tasks))

    # ==================== Sync cycle ====================

    async def _mirror(self) -> None:
        """Write the cart to storage if it is not the tuple written last."""
        cart = self._cart
        if cart is self._mirrored_cart:
            return
        await self.storage.write_raw(self.storage_key, serialize_cart(cart))
        self._mirrored_cart = cart
        logger.debug(f"Cart mirrored ({len(cart)} line item(s))")

    def _refresh_if_stale(self) -> None:
        """Schedule a background refresh if the snapshot was replaced."""
        if self._stock is self._observed_stock:
            return
        self._observed_stock = self._stock
        task = asyncio.create_task(self.refresh_stock())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    async def _commit(self, cart: CartItems) -> None:
        """Install a new cart and run the sync cycle; roll back if mirroring fails."""
        previous = self._cart
        self._cart = cart
        try:
            await self._mirror()
        except Exception:
            self._cart = previous
            raise
        self._refresh_if_stale()

    # ==================== Stock ====================

    async def refresh_stock(self) -> bool:
        """
        Replace the stock snapshot with the full remote listing.

        Failures are logged and otherwise ignored: the snapshot is a
        cache warm, not something a user asked for.

        Returns:
            True if the snapshot was replaced
        """
        try:
            levels = await self.reader.get_all_stock()
            snapshot = MappingProxyType({level.id: level.amount for level in levels})
        except Exception as e:
            logger.warning(f"Stock refresh failed: {e}")
            return False

        # Observed before installed, so this replacement does not retrigger itself
        self._observed_stock = snapshot
        self._stock = snapshot
        logger.debug(f"Stock snapshot refreshed ({len(snapshot)} product(s))")
        return True

    async def invalidate_stock(self) -> None:
        """Mark the snapshot stale; a background refresh replaces it."""
        self._stock = MappingProxyType(dict(self._stock))
        self._refresh_if_stale()

    def _record_stock(self, product_id: int, amount: int) -> None:
        """Merge a freshly fetched stock level into a new snapshot."""
        snapshot = MappingProxyType({**self._stock, product_id: amount})
        self._observed_stock = snapshot
        self._stock = snapshot

    # ==================== Operations ====================

    async def add_product(self, product_id: int) -> CartResult:
        """
        Add one unit of a product.

        A product not yet in the cart is appended with amount 1; otherwise
        its amount is incremented if stock allows it.
        """
        cart = self._cart
        try:
            product = await self.reader.get_product(product_id)
            if product is None:
                logger.info(f"Product {product_id} not found")
                return CartResult.failure(CartError.PRODUCT_NOT_FOUND, MSG_PRODUCT_NOT_FOUND)

            index = find_item(cart, product_id)
            if index is None:
                item = LineItem(product_id=product_id, amount=1, metadata=product.metadata())
                await self._commit(cart + (item,))
                return CartResult.success()

            stock = await self.reader.get_stock_for(product_id)
            self._record_stock(product_id, stock.amount)

            existing = cart[index]
            if existing.amount >= stock.amount:
                logger.info(
                    f"Add rejected for product {product_id}: "
                    f"{existing.amount} in cart, {stock.amount} in stock"
                )
                return CartResult.failure(CartError.INSUFFICIENT_STOCK, MSG_OUT_OF_STOCK)

            updated = cart[:index] + (existing.with_amount(existing.amount + 1),) + cart[index + 1:]
            await self._commit(updated)
            return CartResult.success()
        except Exception as e:
            logger.error(f"Failed to add product {product_id}: {e}")
            return CartResult.failure(CartError.TRANSIENT_FAILURE, MSG_ADD_FAILED)

    async def remove_product(self, product_id: int) -> CartResult:
        """Remove a product's line item; no remote call is made."""
        cart = self._cart
        index = find_item(cart, product_id)
        if index is None:
            return CartResult.failure(CartError.PRODUCT_NOT_IN_CART, MSG_REMOVE_FAILED)

        try:
            await self._commit(cart[:index] + cart[index + 1:])
        except Exception as e:
            logger.error(f"Failed to remove product {product_id}: {e}")
            return CartResult.failure(CartError.TRANSIENT_FAILURE, MSG_REMOVE_FAILED)
        return CartResult.success()

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """
        Set a product's amount.

        An amount below 1 is rejected, not treated as a removal.
        """
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 1:
            return CartResult.failure(CartError.INVALID_AMOUNT, MSG_UPDATE_FAILED)

        cart = self._cart
        try:
            stock = await self.reader.get_stock_for(product_id)
            self._record_stock(product_id, stock.amount)

            if stock.amount < amount:
                logger.info(
                    f"Update rejected for product {product_id}: "
                    f"{amount} requested, {stock.amount} in stock"
                )
                return CartResult.failure(CartError.INSUFFICIENT_STOCK, MSG_OUT_OF_STOCK)

            index = find_item(cart, product_id)
            if index is None:
                return CartResult.failure(CartError.PRODUCT_NOT_IN_CART, MSG_UPDATE_FAILED)

            updated = cart[:index] + (cart[index].with_amount(amount),) + cart[index + 1:]
            await self._commit(updated)
            return CartResult.success()
        except Exception as e:
            logger.error(f"Failed to update product {product_id} to {amount}: {e}")
            return CartResult.failure(CartError.TRANSIENT_FAILURE, MSG_UPDATE_FAILED)

    async def clear(self) -> CartResult:
        """Empty the cart."""
        try:
            await self._commit(EMPTY_CART)
        except Exception as e:
            logger.error(f"Failed to clear cart: {e}")
            return CartResult.failure(CartError.TRANSIENT_FAILURE, MSG_CLEAR_FAILED)
        return CartResult.success()
