from __future__ import annotations

from typing import Tuple

from smart_restock.data.models import RiskLevel


def score_urgency(current_stock: int, minimum_stock: int) -> Tuple[int, RiskLevel]:
    """Map stock relative to its minimum onto a 0-100 urgency score and risk tier.

    Steps are checked from most to least urgent, so a value sitting on a
    boundary gets the higher score.
    """
    if current_stock == 0:
        return 100, "high"
    if current_stock <= minimum_stock * 0.2:
        return 90, "high"
    if current_stock <= minimum_stock * 0.5:
        return 70, "medium"
    if current_stock <= minimum_stock:
        return 50, "medium"
    return 30, "low"


def classify_risk(current_stock: int) -> RiskLevel:
    """Absolute-stock risk level shown on a recommendation and used for bucketing.

    Ignores minimum stock; score_urgency covers the relative scale.
    """
    if current_stock <= 2:
        return "high"
    if current_stock <= 5:
        return "medium"
    return "low"
