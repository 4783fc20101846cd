"""Remote collaborators of the cart store."""
from .models import Product, StockLevel
from .stock_api import StockApiClient

__all__ = ["Product", "StockLevel", "StockApiClient"]
