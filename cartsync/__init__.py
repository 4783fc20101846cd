"""
Cart Sync Package

This package contains the cart reconciliation components:
- config: Environment-driven settings
- db: Upstash Redis client for the durable cart slot
- services: Remote stock/product API client
- cart: Cart store, line items and cache storage
- i18n: User-facing messages for cart failures

Note: Imports are lazy so that importing the package does not
require Redis or HTTP settings to be present.
"""

__all__ = [
    "CartStore",
    "CartResult",
    "CartError",
    "StockApiClient",
    "get_redis",
]


def __getattr__(name):
    """Lazy attribute access for the public entry points."""
    if name == "CartStore":
        from cartsync.cart import CartStore
        return CartStore
    elif name == "CartResult":
        from cartsync.cart import CartResult
        return CartResult
    elif name == "CartError":
        from cartsync.errors import CartError
        return CartError
    elif name == "StockApiClient":
        from cartsync.services.stock_api import StockApiClient
        return StockApiClient
    elif name == "get_redis":
        from cartsync.db import get_redis
        return get_redis
    raise AttributeError(f"module 'cartsync' has no attribute '{name}'")
