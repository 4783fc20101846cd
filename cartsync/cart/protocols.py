from __future__ import annotations

from typing import Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from cartsync.services.models import Product, StockLevel


class StockReaderProtocol(Protocol):
    async def get_product(self, product_id: int) -> Optional[Product]:
        ...

    async def get_stock_for(self, product_id: int) -> StockLevel:
        ...

    async def get_all_stock(self) -> Sequence[StockLevel]:
        ...


class CartStorageProtocol(Protocol):
    async def read_raw(self, key: str) -> Optional[str]:
        ...

    async def write_raw(self, key: str, raw: str) -> None:
        ...
