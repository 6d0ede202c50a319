from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .recommendations import RestockRecommendation


class AnalysisScope(BaseModel):
    """Store (and optionally supplier) an analysis run covers."""
    store_id: str = Field(description="Store being analyzed")
    supplier_id: Optional[str] = Field(default=None, description="Restrict restocking to this supplier")


class StockSummary(BaseModel):
    """Aggregate counters over an inventory snapshot."""
    total_items: int = Field(default=0, description="Number of inventory lines")
    low_stock_items: int = Field(default=0, description="Lines at or below minimum stock")
    overstock_items: int = Field(default=0, description="Lines at or above maximum stock")
    total_stock: int = Field(default=0, description="SUM(current_stock)")
    average_stock: float = Field(default=0.0, description="total_stock / total_items, 0 when empty")


class CategorizedRecommendations(BaseModel):
    """Recommendations bucketed by priority, each ordered by descending urgency."""
    urgent: List[RestockRecommendation] = Field(default_factory=list)
    high_priority: List[RestockRecommendation] = Field(default_factory=list)
    medium_priority: List[RestockRecommendation] = Field(default_factory=list)
    # No current rule routes anything here.
    low_priority: List[RestockRecommendation] = Field(default_factory=list)

    def flatten(self) -> List[RestockRecommendation]:
        return self.urgent + self.high_priority + self.medium_priority + self.low_priority


class RecommendationTotals(BaseModel):
    """Roll-up of recommended quantity and cost."""
    total_recommended_items: int = Field(default=0, description="SUM(recommended_quantity)")
    estimated_cost: Decimal = Field(default=Decimal("0"), description="SUM(estimated_cost)")


class AnalysisNarrative(BaseModel):
    """Templated description of the findings."""
    summary_text: str = Field(description="Human-readable summary")
    confidence_score: float = Field(description="Confidence in the analysis, 0-1")
    key_insights: List[str] = Field(default_factory=list, description="Short findings worth acting on")
    risk_assessment: Dict[str, int] = Field(default_factory=dict, description="Item counts per risk tier")


class AnalysisResult(BaseModel):
    """Aggregate output of one restock analysis run."""
    scope: AnalysisScope
    summary: StockSummary
    categorized: CategorizedRecommendations
    totals: RecommendationTotals
    narrative: AnalysisNarrative
