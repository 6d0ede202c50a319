from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from smart_restock.data.models import (
    CategorizedRecommendations,
    RecommendationTotals,
    RestockRecommendation,
)

# risk_level -> bucket. Nothing maps to low_priority yet.
BUCKET_BY_RISK: Dict[str, str] = {
    "high": "urgent",
    "medium": "high_priority",
    "low": "medium_priority",
}


def categorize_recommendations(
    recommendations: Iterable[RestockRecommendation],
) -> Tuple[CategorizedRecommendations, RecommendationTotals]:
    """Bucket recommendations by risk level and roll up quantity and cost.

    Each bucket is sorted by descending urgency_score; sorted() is stable, so
    equal scores keep their input order.
    """
    buckets: Dict[str, List[RestockRecommendation]] = {
        "urgent": [],
        "high_priority": [],
        "medium_priority": [],
        "low_priority": [],
    }
    total_quantity = 0
    total_cost = Decimal("0")

    for recommendation in recommendations:
        buckets[BUCKET_BY_RISK[recommendation.risk_level]].append(recommendation)
        total_quantity += recommendation.recommended_quantity
        total_cost += recommendation.estimated_cost

    categorized = CategorizedRecommendations(
        **{
            name: sorted(items, key=lambda r: r.urgency_score, reverse=True)
            for name, items in buckets.items()
        }
    )
    totals = RecommendationTotals(
        total_recommended_items=total_quantity,
        estimated_cost=total_cost,
    )
    return categorized, totals
