from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InventoryLine(BaseModel):
    """One (store, product, variant) stock fact from the inventory snapshot."""
    model_config = ConfigDict(frozen=True)

    store_id: str = Field(description="Store identifier")
    product_id: str = Field(description="Product identifier")
    variant_id: str = Field(description="Product variant identifier")
    current_stock: int = Field(description="Units currently on hand")
    minimum_stock: int = Field(description="Restock threshold")
    maximum_stock: int = Field(description="Overstock threshold")
    reserved_stock: int = Field(default=0, description="Units held for open orders")
    brand_id: Optional[str] = Field(default=None, description="Brand of the product, if known")
    category_id: Optional[str] = Field(default=None, description="Category of the product, if known")

    @property
    def available_stock(self) -> int:
        return self.current_stock - self.reserved_stock

    @property
    def low_stock(self) -> bool:
        return self.current_stock <= self.minimum_stock

    @property
    def overstock(self) -> bool:
        return self.current_stock >= self.maximum_stock
