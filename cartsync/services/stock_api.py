"""
Stock API Client

HTTP client for the product/stock inventory API consumed by the cart store.
Endpoints (json-server layout):
- GET /products/{id}
- GET /stock/{id}
- GET /stock
"""

from typing import Any, Optional

import httpx

from cartsync import config
from cartsync.logging import get_logger, sanitize_string_for_logging
from .models import Product, StockLevel

logger = get_logger(__name__)


class StockApiClient:
    """
    Async reader for product metadata and stock levels.

    No retries: a failed request surfaces to the caller, which decides
    whether it is a user-facing failure or a silent one.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize stock API client.

        Args:
            base_url: Base URL of the inventory API (default: STOCK_API_URL)
            timeout: Request timeout in seconds (default: STOCK_API_TIMEOUT)
            http_client: Pre-built client, e.g. with a mock transport
        """
        self.base_url = (base_url or config.STOCK_API_URL).rstrip("/")
        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else config.STOCK_API_TIMEOUT,
        )

    async def __aenter__(self) -> "StockApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _get(self, path: str) -> Any:
        """GET a JSON document, raising httpx.HTTPStatusError on 4xx/5xx."""
        url = f"{self.base_url}{path}"
        response = await self._http_client.get(url, headers={"Accept": "application/json"})

        if response.status_code >= 400:
            logger.warning(
                f"Stock API request failed: GET {path} -> {response.status_code} "
                f"{sanitize_string_for_logging(response.text)}"
            )
            response.raise_for_status()

        return response.json()

    async def get_product(self, product_id: int) -> Optional[Product]:
        """Get product metadata, or None when the API has no such product."""
        try:
            data = await self._get(f"/products/{product_id}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

        # json-server answers {} for some missing resources
        if not data:
            return None
        return Product.model_validate(data)

    async def get_stock_for(self, product_id: int) -> StockLevel:
        """Get the stock level for one product."""
        data = await self._get(f"/stock/{product_id}")
        return StockLevel.model_validate(data)

    async def get_all_stock(self) -> list[StockLevel]:
        """Get the full stock listing."""
        data = await self._get("/stock")
        return [StockLevel.model_validate(entry) for entry in data]
