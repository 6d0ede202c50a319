from .errors import (
    RestockError,
    InvalidInputError,
    EmptySelectionError,
    AnalysisCancelledError,
)
from .metrics import calculate_stock_metrics
from .promotions import PromotionTarget, match_promotion
from .urgency import score_urgency, classify_risk
from .builder import RecommendationBuilder, apply_promotion
from .categorizer import categorize_recommendations
from .narrative import ConfidenceSource, generate_narrative
from .orders import materialize_order, select_restock_items
from .service import SmartRestockService

__all__ = [
    # Errors
    "RestockError",
    "InvalidInputError",
    "EmptySelectionError",
    "AnalysisCancelledError",
    # Pipeline stages
    "calculate_stock_metrics",
    "PromotionTarget",
    "match_promotion",
    "score_urgency",
    "classify_risk",
    "RecommendationBuilder",
    "apply_promotion",
    "categorize_recommendations",
    "ConfidenceSource",
    "generate_narrative",
    "materialize_order",
    "select_restock_items",
    # Facade
    "SmartRestockService",
]
