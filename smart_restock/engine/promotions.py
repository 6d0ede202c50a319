from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Literal, NamedTuple, Optional, Union

from smart_restock.data.models import Promotion

MatchStrategy = Literal["first", "best"]

# Tier order for the "best" strategy.
SCOPE_PRECEDENCE = ("product", "brand", "category")
AMOUNT_DISCOUNTS = ("percentage", "fixed_amount")


class PromotionTarget(NamedTuple):
    """What a promotion has to match: the item and its catalog attributes."""
    product_id: str
    variant_id: Optional[str] = None
    brand_id: Optional[str] = None
    category_id: Optional[str] = None


def promotion_applies(promotion: Promotion, target: PromotionTarget) -> bool:
    """True when the promotion's scope target is the given item."""
    if promotion.scope == "product":
        if promotion.product_id is None or promotion.product_id != target.product_id:
            return False
        return promotion.variant_id is None or promotion.variant_id == target.variant_id
    if promotion.scope == "brand":
        return promotion.brand_id is not None and promotion.brand_id == target.brand_id
    if promotion.scope == "category":
        return promotion.category_id is not None and promotion.category_id == target.category_id
    return False


def _pick_best(candidates: List[Promotion]) -> Optional[Promotion]:
    for scope in SCOPE_PRECEDENCE:
        tier = [p for p in candidates if p.scope == scope]
        if not tier:
            continue
        amounts = [p for p in tier if p.discount_type in AMOUNT_DISCOUNTS]
        if amounts:
            # Raw discount_value, percentage points and flat amounts alike.
            # max() keeps the first of equal values, so ties go to catalog order
            return max(amounts, key=lambda p: p.discount_value)
        return tier[0]
    return None


def match_promotion(
    target: PromotionTarget,
    promotions: Iterable[Promotion],
    now: Union[date, datetime],
    supplier_id: Optional[str] = None,
    strategy: MatchStrategy = "first",
) -> Optional[Promotion]:
    """Return the promotion to apply to `target`, or None.

    Args:
        target: The product/variant/brand/category being restocked.
        promotions: Promotion catalog, in catalog order.
        now: Validity is checked against this instant.
        supplier_id: When set, only this supplier's promotions are considered.
        strategy: "first" takes the first valid match in catalog order.
            "best" prefers product, then brand, then category scope, and within
            a scope the largest percentage/fixed discount, falling back to
            buy_x_get_y/free_shipping only when no amount discount matches.
    Returns:
        Promotion | None: The matched promotion.
    """
    candidates = [
        p for p in promotions
        if (supplier_id is None or p.supplier_id == supplier_id)
        and promotion_applies(p, target)
        and p.is_valid_at(now)
    ]
    if not candidates:
        return None
    if strategy == "first":
        return candidates[0]
    if strategy == "best":
        return _pick_best(candidates)
    raise ValueError(f"Unknown promotion match strategy: {strategy}")
