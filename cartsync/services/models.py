"""Pydantic models for stock API payloads."""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Product as served by GET /products/{id}.

    Only the id is interpreted; title, price, image and anything else the
    API sends are carried through to the cart untouched.
    """
    model_config = ConfigDict(extra="allow")

    id: int = Field(description="Inventory product identifier")

    def metadata(self) -> Dict[str, Any]:
        """Everything except the id (and any stray amount field)."""
        return self.model_dump(exclude={"id", "amount"})


class StockLevel(BaseModel):
    """Stock entry as served by GET /stock and GET /stock/{id}."""
    id: int = Field(description="Product identifier")
    amount: int = Field(description="Units available", ge=0)
