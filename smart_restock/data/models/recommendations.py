from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .promotions import Promotion

RiskLevel = Literal["low", "medium", "high"]


class RestockRecommendation(BaseModel):
    """One proposed restock line produced by an analysis run."""
    model_config = ConfigDict(frozen=True)

    product_id: str = Field(description="Product to restock")
    variant_id: str = Field(description="Variant to restock")
    current_stock: int = Field(description="Units on hand at analysis time")
    minimum_stock: int = Field(description="Restock threshold at analysis time")
    recommended_quantity: int = Field(description="Units to order")
    unit_cost: Decimal = Field(description="Cost of one unit")
    estimated_cost: Decimal = Field(description="Line cost after any promotion")
    risk_level: RiskLevel = Field(description="Display risk from absolute stock count")
    urgency_score: int = Field(description="0-100 restock pressure relative to minimum stock")
    applied_promotion: Optional[Promotion] = Field(default=None, description="Promotion matched for this line")
    supplier_id: Optional[str] = Field(default=None, description="Supplier chosen for this line")

    @property
    def base_cost(self) -> Decimal:
        return self.unit_cost * self.recommended_quantity
