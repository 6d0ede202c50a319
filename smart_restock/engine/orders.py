from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional

from smart_restock.data.models import (
    AnalysisResult,
    RestockOrderDraft,
    RestockOrderItem,
    RestockRecommendation,
)
from smart_restock.engine.errors import EmptySelectionError

DEFAULT_ORDER_NOTES = "Created from Smart Restock recommendations"


def select_restock_items(
    result: AnalysisResult,
    supplier_id: Optional[str] = None,
) -> List[RestockRecommendation]:
    """Urgent, then high, then medium priority lines that still need units.

    With `supplier_id`, lines addressed to another supplier are left out.
    Lines with no known supplier can be ordered from anyone.
    """
    selected = (
        result.categorized.urgent
        + result.categorized.high_priority
        + result.categorized.medium_priority
    )
    return [
        r for r in selected
        if r.recommended_quantity > 0
        and (supplier_id is None or r.supplier_id in (None, supplier_id))
    ]


def materialize_order(
    supplier_id: str,
    recommendations: Iterable[RestockRecommendation],
    store_id: Optional[str] = None,
    notes: Optional[str] = DEFAULT_ORDER_NOTES,
    now: Optional[datetime] = None,
) -> RestockOrderDraft:
    """Build a pending order draft from the chosen recommendations.

    Args:
        supplier_id: Supplier the order is addressed to.
        recommendations: Caller-chosen lines; lines without a positive
            quantity are dropped.
        store_id: Store receiving the goods.
        notes: Note stored with the draft.
        now: Creation timestamp, defaults to the current UTC time.
    Returns:
        RestockOrderDraft: The unpersisted draft.
    Raises:
        EmptySelectionError: If no line is left to order.
    """
    items = [
        RestockOrderItem(
            product_id=r.product_id,
            variant_id=r.variant_id,
            quantity=r.recommended_quantity,
            unit_cost=r.unit_cost,
            line_cost=r.estimated_cost,
        )
        for r in recommendations
        if r.recommended_quantity > 0
    ]
    if not items:
        raise EmptySelectionError()

    return RestockOrderDraft(
        supplier_id=supplier_id,
        store_id=store_id,
        items=items,
        total_items=sum(item.quantity for item in items),
        total_cost=sum((item.line_cost for item in items), Decimal("0")),
        status="pending",
        created_at=now or datetime.now(timezone.utc),
        notes=notes,
    )
