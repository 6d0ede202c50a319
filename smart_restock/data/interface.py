from __future__ import annotations

from typing import List, Optional, Protocol

from .models import (
    InventoryFilters,
    PromotionFilters,
    InventoryLine,
    Promotion,
    ProductCost,
)


# ---- Collaborator protocols ----

class InventoryProvider(Protocol):
    """Supplies the current stock snapshot for a store.

    Implementations must not return negative stock values; the engine
    re-checks and refuses to analyze impossible lines.
    """

    def get_inventory(self, filters: InventoryFilters) -> List[InventoryLine]:
        """Get inventory lines based on filters."""
        ...


class PromotionProvider(Protocol):
    """Supplies well-formed promotions. Time validity is re-checked by the engine."""

    def get_promotions(self, filters: PromotionFilters) -> List[Promotion]:
        """Get promotions based on filters."""
        ...


class CostLookup(Protocol):
    """Supplies unit costs. A missing entry is allowed and falls back to the configured default."""

    def get_product_cost(
        self,
        product_id: str,
        variant_id: str,
        supplier_id: Optional[str] = None,
    ) -> Optional[ProductCost]:
        """Get the unit cost of a product variant, preferring the given supplier's quote."""
        ...


class RestockDataAccess(InventoryProvider, PromotionProvider, CostLookup, Protocol):
    """
    Backend-agnostic contract for everything a restock analysis reads.

    Implementations MUST avoid result caching inside these methods.
    Each call should return a fresh snapshot of the underlying source.
    """
