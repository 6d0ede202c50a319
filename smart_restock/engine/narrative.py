"""
Templated analysis narrative.

Stands in for a language-model summary: the text and insights are picked
from fixed templates, so the same findings always produce the same narrative.
A ConfidenceSource can replace the fixed confidence value.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from smart_restock.config import get_config
from smart_restock.data.models import (
    AnalysisNarrative,
    CategorizedRecommendations,
    StockSummary,
)
from smart_restock.engine.errors import InvalidInputError

ConfidenceSource = Callable[[StockSummary, CategorizedRecommendations], float]

SUMMARY_TEMPLATE = (
    "Based on {period} days of inventory analysis, {low} items require immediate restocking "
    "and {over} items are overstocked. The system recommends optimizing stock levels to "
    "improve cash flow and reduce holding costs."
)

INSIGHT_LOW_STOCK = "Low stock items need immediate attention"
INSIGHT_OVERSTOCK = "Overstock items should be promoted or discounted"
INSIGHT_PROMOTIONS = "Supplier promotions can optimize restock timing"
INSIGHT_HEALTHY = "Stock levels are within their configured thresholds"


def _key_insights(summary: StockSummary, categorized: CategorizedRecommendations) -> List[str]:
    insights = []
    if summary.low_stock_items:
        insights.append(INSIGHT_LOW_STOCK)
    if summary.overstock_items:
        insights.append(INSIGHT_OVERSTOCK)
    if any(r.applied_promotion is not None for r in categorized.flatten()):
        insights.append(INSIGHT_PROMOTIONS)
    if not insights:
        insights.append(INSIGHT_HEALTHY)
    return insights


def _risk_assessment(summary: StockSummary, categorized: CategorizedRecommendations) -> Dict[str, int]:
    high = len(categorized.urgent)
    medium = len(categorized.high_priority)
    return {
        "high_risk_items": high,
        "medium_risk_items": medium,
        "low_risk_items": max(summary.total_items - high - medium, 0),
    }


def generate_narrative(
    summary: StockSummary,
    categorized: CategorizedRecommendations,
    analysis_period: Optional[int] = None,
    confidence_source: Optional[ConfidenceSource] = None,
) -> AnalysisNarrative:
    """Describe the findings of an analysis run. Makes no external calls."""
    config = get_config()
    period = analysis_period if analysis_period is not None else config.analysis_period_days

    if confidence_source is None:
        confidence = config.default_confidence
    else:
        confidence = float(confidence_source(summary, categorized))
    if not 0.0 <= confidence <= 1.0:
        raise InvalidInputError(f"Confidence score must be between 0 and 1, got {confidence}")

    return AnalysisNarrative(
        summary_text=SUMMARY_TEMPLATE.format(
            period=period,
            low=summary.low_stock_items,
            over=summary.overstock_items,
        ),
        confidence_score=confidence,
        key_insights=_key_insights(summary, categorized),
        risk_assessment=_risk_assessment(summary, categorized),
    )
