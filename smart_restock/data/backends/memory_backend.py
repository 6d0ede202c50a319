from __future__ import annotations

from typing import Iterable, List, Optional

from ..interface import RestockDataAccess
from ..models import (
    InventoryFilters, PromotionFilters, InventoryLine, Promotion, ProductCost,
)


class InMemoryRestockDataAccess(RestockDataAccess):
    """
    In-memory implementation for tests and embedding.
    Holds model instances as given; filtering mirrors CsvRestockDataAccess.
    """

    def __init__(
        self,
        inventory: Iterable[InventoryLine] = (),
        promotions: Iterable[Promotion] = (),
        product_costs: Iterable[ProductCost] = (),
    ) -> None:
        self.inventory = list(inventory)
        self.promotions = list(promotions)
        self.product_costs = list(product_costs)

    def get_inventory(self, filters: InventoryFilters) -> List[InventoryLine]:
        lines = [line for line in self.inventory if line.store_id == filters.store_id]

        if filters.supplier_id:
            carried = {c.product_id for c in self.product_costs if c.supplier_id == filters.supplier_id}
            lines = [line for line in lines if line.product_id in carried]
        if filters.product_id:
            wanted = {filters.product_id} if isinstance(filters.product_id, str) else set(filters.product_id)
            lines = [line for line in lines if line.product_id in wanted]
        if filters.low_stock_only:
            lines = [line for line in lines if line.low_stock]
        return lines

    def get_promotions(self, filters: PromotionFilters) -> List[Promotion]:
        promotions = list(self.promotions)
        if filters.supplier_id:
            promotions = [p for p in promotions if p.supplier_id == filters.supplier_id]
        if filters.active_on:
            promotions = [p for p in promotions if p.start_date <= filters.active_on <= p.end_date]
        return promotions

    def get_product_cost(
        self,
        product_id: str,
        variant_id: str,
        supplier_id: Optional[str] = None,
    ) -> Optional[ProductCost]:
        matches = [
            c for c in self.product_costs
            if c.product_id == product_id and c.variant_id == variant_id
        ]
        if supplier_id:
            quoted = [c for c in matches if c.supplier_id == supplier_id]
            if quoted:
                matches = quoted
        return matches[0] if matches else None
