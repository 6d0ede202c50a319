from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from smart_restock.config import get_config
from smart_restock.data.interface import CostLookup
from smart_restock.data.models import InventoryLine, Promotion, RestockRecommendation
from smart_restock.engine.promotions import MatchStrategy, PromotionTarget, match_promotion
from smart_restock.engine.urgency import classify_risk, score_urgency
from smart_restock.logging import get_logger

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def apply_promotion(base_cost: Decimal, promotion: Optional[Promotion]) -> Decimal:
    """Discounted cost of a line. Never above base_cost, never below zero.

    buy_x_get_y and free_shipping change what arrives or what shipping costs,
    not the line cost, so they pass base_cost through.
    """
    if promotion is None:
        return base_cost
    if promotion.discount_type == "percentage":
        cost = base_cost * (HUNDRED - promotion.discount_value) / HUNDRED
    elif promotion.discount_type == "fixed_amount":
        cost = base_cost - promotion.discount_value
    else:
        cost = base_cost
    return min(max(cost, ZERO), base_cost)


class RecommendationBuilder:
    """Turns low-stock inventory lines into restock recommendations.

    Collaborators and fallbacks are passed in explicitly; anything left as
    None is taken from get_config().
    """

    def __init__(
        self,
        cost_lookup: Optional[CostLookup] = None,
        promotions: Sequence[Promotion] = (),
        now: Union[date, datetime, None] = None,
        supplier_id: Optional[str] = None,
        default_unit_cost: Optional[Decimal] = None,
        default_supplier_id: Optional[str] = None,
        minimum_restock_quantity: Optional[int] = None,
        match_strategy: Optional[MatchStrategy] = None,
    ) -> None:
        config = get_config()
        self.cost_lookup = cost_lookup
        self.promotions = list(promotions)
        self.now = now if now is not None else datetime.now()
        self.supplier_id = supplier_id
        self.default_unit_cost = Decimal(str(default_unit_cost if default_unit_cost is not None else config.default_unit_cost))
        self.default_supplier_id = default_supplier_id if default_supplier_id is not None else config.default_supplier_id
        self.minimum_restock_quantity = (
            minimum_restock_quantity if minimum_restock_quantity is not None else config.minimum_restock_quantity
        )
        self.match_strategy = match_strategy or config.promotion_match_strategy
        self.logger = get_logger(__name__)

    def recommended_quantity(self, line: InventoryLine) -> int:
        return max(line.minimum_stock - line.current_stock, self.minimum_restock_quantity, 1)

    def _resolve_cost(self, line: InventoryLine):
        """Return (unit_cost, supplier_id) for a line, using fallbacks where data is missing."""
        entry = None
        if self.cost_lookup is not None:
            entry = self.cost_lookup.get_product_cost(line.product_id, line.variant_id, self.supplier_id)
        if entry is None:
            self.logger.debug(
                f"No cost for {line.product_id}/{line.variant_id}, using default {self.default_unit_cost}"
            )
            unit_cost = self.default_unit_cost
        else:
            unit_cost = Decimal(str(entry.unit_cost))

        supplier_id = self.supplier_id
        if supplier_id is None and entry is not None:
            supplier_id = entry.supplier_id
        if supplier_id is None:
            supplier_id = self.default_supplier_id
        return unit_cost, supplier_id

    def build(self, line: InventoryLine) -> Optional[RestockRecommendation]:
        """Recommendation for one line, or None when the line is not low on stock."""
        if not line.low_stock:
            return None

        quantity = self.recommended_quantity(line)
        unit_cost, supplier_id = self._resolve_cost(line)
        base_cost = unit_cost * quantity

        target = PromotionTarget(
            product_id=line.product_id,
            variant_id=line.variant_id,
            brand_id=line.brand_id,
            category_id=line.category_id,
        )
        # Only the supplier the line is addressed to may discount it
        promotion = match_promotion(
            target,
            self.promotions,
            self.now,
            supplier_id=supplier_id,
            strategy=self.match_strategy,
        )
        estimated_cost = apply_promotion(base_cost, promotion)
        urgency_score, _ = score_urgency(line.current_stock, line.minimum_stock)

        return RestockRecommendation(
            product_id=line.product_id,
            variant_id=line.variant_id,
            current_stock=line.current_stock,
            minimum_stock=line.minimum_stock,
            recommended_quantity=quantity,
            unit_cost=unit_cost,
            estimated_cost=estimated_cost,
            risk_level=classify_risk(line.current_stock),
            urgency_score=urgency_score,
            applied_promotion=promotion,
            supplier_id=supplier_id,
        )

    def build_all(self, lines: Iterable[InventoryLine]) -> List[RestockRecommendation]:
        recommendations = []
        for line in lines:
            recommendation = self.build(line)
            if recommendation is not None:
                recommendations.append(recommendation)
        self.logger.debug(f"Built {len(recommendations)} restock recommendations")
        return recommendations
