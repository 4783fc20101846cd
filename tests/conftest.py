"""Pytest configuration and fixtures"""
import os
from typing import Optional

import httpx
import pytest
import pytest_asyncio

os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("STOCK_API_URL", "http://stock.test")
os.environ.setdefault("CART_LANGUAGE", "en")

from cartsync.cart import CartStore
from cartsync.cart.models import parse_cart
from cartsync.errors import CartStorageError
from cartsync.services.models import Product, StockLevel

STORAGE_KEY = "@RocketShoes:cart"


class FakeStorage:
    """In-memory stand-in for the durable cart slot."""

    def __init__(self, initial: Optional[str] = None):
        self.values: dict[str, str] = {}
        if initial is not None:
            self.values[STORAGE_KEY] = initial
        self.writes: list[str] = []
        self.fail_reads = False
        self.fail_writes = False

    async def read_raw(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise CartStorageError("read failed")
        return self.values.get(key)

    async def write_raw(self, key: str, raw: str) -> None:
        if self.fail_writes:
            raise CartStorageError("write failed")
        self.values[key] = raw
        self.writes.append(raw)

    def cached_cart(self):
        return parse_cart(self.values.get(STORAGE_KEY))


class FakeStockReader:
    """Scripted product/stock API."""

    def __init__(self, products: dict[int, dict], stock: dict[int, int]):
        self.products = products
        self.stock = stock
        self.fail_products = False
        self.fail_stock = False
        self.fail_listing = False
        self.listing_calls = 0

    async def get_product(self, product_id: int) -> Optional[Product]:
        if self.fail_products:
            raise httpx.ConnectError("connection refused")
        data = self.products.get(product_id)
        return Product.model_validate(data) if data else None

    async def get_stock_for(self, product_id: int) -> StockLevel:
        if self.fail_stock:
            raise httpx.ConnectError("connection refused")
        if product_id not in self.stock:
            request = httpx.Request("GET", f"http://stock.test/stock/{product_id}")
            raise httpx.HTTPStatusError(
                "not found", request=request, response=httpx.Response(404, request=request)
            )
        return StockLevel(id=product_id, amount=self.stock[product_id])

    async def get_all_stock(self) -> list[StockLevel]:
        self.listing_calls += 1
        if self.fail_listing:
            raise httpx.ConnectError("connection refused")
        return [StockLevel(id=pid, amount=amount) for pid, amount in self.stock.items()]


@pytest.fixture
def sample_products():
    """Sample product catalog"""
    return {
        1: {
            "id": 1,
            "title": "Tênis de Caminhada Leve Confortável",
            "price": 179.9,
            "image": "https://example.test/shoe-1.jpg",
        },
        2: {
            "id": 2,
            "title": "Tênis VR Caminhada Confortável Detalhes Couro Masculino",
            "price": 139.9,
            "image": "https://example.test/shoe-2.jpg",
        },
        3: {
            "id": 3,
            "title": "Tênis Adidas Duramo Lite 2.0",
            "price": 219.9,
            "image": "https://example.test/shoe-3.jpg",
        },
    }


@pytest.fixture
def stock_reader(sample_products):
    return FakeStockReader(sample_products, {1: 5, 2: 1, 3: 10})


@pytest.fixture
def storage():
    return FakeStorage()


@pytest_asyncio.fixture
async def store(stock_reader, storage):
    """Loaded store over an empty cache, initial refresh settled."""
    cart_store = CartStore(stock_reader, storage, storage_key=STORAGE_KEY)
    await cart_store.load()
    await cart_store.wait_for_refresh()
    return cart_store
