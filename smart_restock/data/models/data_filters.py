from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class InventoryFilters(BaseModel):
    """Filters for the inventory snapshot data."""
    store_id: str = Field(description="Store whose snapshot is requested")
    supplier_id: Optional[str] = Field(default=None, description="Only products this supplier carries")
    product_id: Optional[str | list[str]] = Field(default=None, description="Product ID filter (single product or list of products)")
    low_stock_only: bool = Field(default=False, description="Only lines at or below minimum stock")


class PromotionFilters(BaseModel):
    """Filters for the promotion catalog."""
    supplier_id: Optional[str] = Field(default=None, description="Only this supplier's promotions")
    active_on: Optional[date] = Field(default=None, description="Only promotions whose window covers this date")
