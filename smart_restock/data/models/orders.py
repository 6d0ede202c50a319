from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RestockOrderItem(BaseModel):
    """One line of a draft restock order."""
    product_id: str = Field(description="Product identifier")
    variant_id: str = Field(description="Variant identifier")
    quantity: int = Field(description="Units ordered")
    unit_cost: Decimal = Field(description="Cost of one unit")
    line_cost: Decimal = Field(description="Cost of this line after promotion")


class RestockOrderDraft(BaseModel):
    """Unpersisted purchase order built from a recommendation selection."""
    supplier_id: str = Field(description="Supplier the order goes to")
    store_id: Optional[str] = Field(default=None, description="Store receiving the goods")
    items: List[RestockOrderItem] = Field(description="Order lines")
    total_items: int = Field(description="SUM(quantity)")
    total_cost: Decimal = Field(description="SUM(line_cost)")
    status: Literal["pending"] = Field(default="pending", description="Drafts always start pending")
    created_at: datetime = Field(description="When the draft was built (UTC)")
    notes: Optional[str] = Field(default=None, description="Free-form note stored with the order")
