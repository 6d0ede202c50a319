from .data_filters import (
    InventoryFilters,
    PromotionFilters,
)

from .inventory import InventoryLine
from .promotions import Promotion, PromotionScope, DiscountType
from .products import ProductCost
from .recommendations import RestockRecommendation, RiskLevel
from .orders import RestockOrderItem, RestockOrderDraft
from .analysis import (
    AnalysisScope,
    StockSummary,
    CategorizedRecommendations,
    RecommendationTotals,
    AnalysisNarrative,
    AnalysisResult,
)

__all__ = [
    # Filter classes
    "InventoryFilters",
    "PromotionFilters",
    # Input facts
    "InventoryLine",
    "Promotion",
    "PromotionScope",
    "DiscountType",
    "ProductCost",
    # Engine output
    "RestockRecommendation",
    "RiskLevel",
    "RestockOrderItem",
    "RestockOrderDraft",
    "AnalysisScope",
    "StockSummary",
    "CategorizedRecommendations",
    "RecommendationTotals",
    "AnalysisNarrative",
    "AnalysisResult",
]
