from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCost(BaseModel):
    """Unit purchase cost of a product variant, optionally per supplier."""
    model_config = ConfigDict(frozen=True)

    product_id: str = Field(description="Product identifier")
    variant_id: str = Field(description="Product variant identifier")
    supplier_id: Optional[str] = Field(default=None, description="Supplier quoting this cost")
    unit_cost: Decimal = Field(description="Cost of one unit")
