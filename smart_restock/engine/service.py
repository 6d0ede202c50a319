"""
Smart restock service.

Entry points for callers: `analyze` runs the full pipeline over data the
caller already holds, `analyze_store` fetches it from a RestockDataAccess
first, and `materialize_order` turns a recommendation selection into a draft.
Every call is synchronous and keeps no state between calls, so independent
scopes can be analyzed on separate threads (`analyze_many`).
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from smart_restock.config import get_config
from smart_restock.data.interface import CostLookup, RestockDataAccess
from smart_restock.data.models import (
    AnalysisResult,
    AnalysisScope,
    InventoryFilters,
    InventoryLine,
    Promotion,
    PromotionFilters,
    RestockOrderDraft,
    RestockRecommendation,
)
from smart_restock.engine.builder import RecommendationBuilder
from smart_restock.engine.categorizer import categorize_recommendations
from smart_restock.engine.errors import AnalysisCancelledError, InvalidInputError
from smart_restock.engine.metrics import calculate_stock_metrics
from smart_restock.engine.narrative import ConfidenceSource, generate_narrative
from smart_restock.engine.orders import DEFAULT_ORDER_NOTES, materialize_order, select_restock_items
from smart_restock.logging import get_logger


def validate_inventory(lines: Iterable[InventoryLine]) -> List[InventoryLine]:
    """Reject stock figures that cannot exist."""
    checked = []
    for line in lines:
        key = f"{line.store_id}/{line.product_id}/{line.variant_id}"
        for field in ("current_stock", "minimum_stock", "maximum_stock", "reserved_stock"):
            if getattr(line, field) < 0:
                raise InvalidInputError(f"Negative {field} for inventory line {key}")
        if line.reserved_stock > line.current_stock:
            raise InvalidInputError(
                f"Reserved stock {line.reserved_stock} exceeds current stock {line.current_stock} for {key}"
            )
        checked.append(line)
    return checked


def validate_promotions(promotions: Iterable[Promotion]) -> List[Promotion]:
    """Reject promotions with inverted windows or negative terms."""
    checked = []
    for promotion in promotions:
        if promotion.end_date < promotion.start_date:
            raise InvalidInputError(
                f"Promotion {promotion.id} ends ({promotion.end_date}) before it starts ({promotion.start_date})"
            )
        if promotion.discount_value < 0:
            raise InvalidInputError(f"Promotion {promotion.id} has a negative discount value")
        if promotion.current_usage < 0 or (promotion.max_usage is not None and promotion.max_usage < 0):
            raise InvalidInputError(f"Promotion {promotion.id} has negative usage counters")
        checked.append(promotion)
    return checked


class SmartRestockService:
    """Runs restock analyses and builds order drafts.

    Args:
        analysis_period: Days of history the narrative reports; defaults to config.
        confidence_source: Optional replacement for the fixed confidence value.
        default_unit_cost: Cost used when the lookup has no entry; defaults to config.
    """

    def __init__(
        self,
        analysis_period: Optional[int] = None,
        confidence_source: Optional[ConfidenceSource] = None,
        default_unit_cost: Optional[Decimal] = None,
    ) -> None:
        self.config = get_config()
        self.analysis_period = analysis_period if analysis_period is not None else self.config.analysis_period_days
        self.confidence_source = confidence_source
        self.default_unit_cost = default_unit_cost
        self.logger = get_logger(__name__)

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event], stage: str) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise AnalysisCancelledError(f"Analysis cancelled before {stage}")

    def analyze(
        self,
        scope: AnalysisScope,
        inventory: Sequence[InventoryLine],
        promotions: Sequence[Promotion] = (),
        cost_lookup: Optional[CostLookup] = None,
        now: Union[date, datetime, None] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> AnalysisResult:
        """Analyze one store's snapshot and return categorized recommendations.

        Raises:
            InvalidInputError: If inventory or promotions are impossible.
            AnalysisCancelledError: If cancel_event is set between stages.
        """
        lines = validate_inventory(inventory)
        catalog = validate_promotions(promotions)
        self.logger.info(
            f"Analyzing store {scope.store_id} (supplier={scope.supplier_id}): "
            f"{len(lines)} inventory lines, {len(catalog)} promotions"
        )

        self._check_cancelled(cancel_event, "metrics")
        summary = calculate_stock_metrics(lines)

        self._check_cancelled(cancel_event, "building recommendations")
        builder = RecommendationBuilder(
            cost_lookup=cost_lookup,
            promotions=catalog,
            now=now,
            supplier_id=scope.supplier_id,
            default_unit_cost=self.default_unit_cost,
        )
        recommendations = builder.build_all(lines)

        self._check_cancelled(cancel_event, "categorizing")
        categorized, totals = categorize_recommendations(recommendations)
        narrative = generate_narrative(
            summary,
            categorized,
            analysis_period=self.analysis_period,
            confidence_source=self.confidence_source,
        )

        self.logger.info(
            f"Store {scope.store_id}: {len(recommendations)} recommendations, "
            f"{totals.total_recommended_items} units, estimated cost {totals.estimated_cost}"
        )
        return AnalysisResult(
            scope=scope,
            summary=summary,
            categorized=categorized,
            totals=totals,
            narrative=narrative,
        )

    def analyze_store(
        self,
        scope: AnalysisScope,
        data_access: RestockDataAccess,
        include_promotions: Optional[bool] = None,
        now: Union[date, datetime, None] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> AnalysisResult:
        """Fetch the scope's snapshot and promotions from `data_access`, then analyze."""
        if include_promotions is None:
            include_promotions = self.config.include_promotions

        inventory = data_access.get_inventory(
            InventoryFilters(store_id=scope.store_id, supplier_id=scope.supplier_id)
        )
        promotions: List[Promotion] = []
        if include_promotions:
            promotions = data_access.get_promotions(PromotionFilters(supplier_id=scope.supplier_id))

        return self.analyze(
            scope,
            inventory,
            promotions,
            cost_lookup=data_access,
            now=now,
            cancel_event=cancel_event,
        )

    def analyze_many(
        self,
        scopes: Sequence[AnalysisScope],
        data_access: RestockDataAccess,
        max_workers: Optional[int] = None,
        now: Union[date, datetime, None] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[AnalysisResult]:
        """Analyze several scopes concurrently. Results come back in scope order."""
        workers = max_workers or self.config.max_workers
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self.analyze_store, scope, data_access, None, now, cancel_event)
                for scope in scopes
            ]
            return [future.result() for future in futures]

    def materialize_order(
        self,
        supplier_id: str,
        recommendations: Iterable[RestockRecommendation],
        store_id: Optional[str] = None,
        notes: Optional[str] = DEFAULT_ORDER_NOTES,
        now: Optional[datetime] = None,
    ) -> RestockOrderDraft:
        """Build a pending draft. Raises EmptySelectionError for an empty selection."""
        draft = materialize_order(supplier_id, recommendations, store_id=store_id, notes=notes, now=now)
        self.logger.info(
            f"Drafted restock order for supplier {supplier_id}: "
            f"{len(draft.items)} lines, {draft.total_items} units, total {draft.total_cost}"
        )
        return draft

    def create_order_from_analysis(
        self,
        result: AnalysisResult,
        supplier_id: Optional[str] = None,
        notes: Optional[str] = DEFAULT_ORDER_NOTES,
        now: Optional[datetime] = None,
    ) -> RestockOrderDraft:
        """Materialize the supplier's urgent, high and medium priority lines of an analysis.

        Raises:
            InvalidInputError: If neither the call nor the scope names a supplier.
            EmptySelectionError: If the supplier has nothing to restock.
        """
        supplier = supplier_id or result.scope.supplier_id
        if supplier is None:
            raise InvalidInputError("A supplier is required to draft a restock order")
        return self.materialize_order(
            supplier,
            select_restock_items(result, supplier),
            store_id=result.scope.store_id,
            notes=notes,
            now=now,
        )
