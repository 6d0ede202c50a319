from __future__ import annotations

from typing import Iterable

from smart_restock.data.models import InventoryLine, StockSummary


def calculate_stock_metrics(lines: Iterable[InventoryLine]) -> StockSummary:
    """Summarize an inventory snapshot. Empty input yields zeroed counters."""
    total_items = 0
    low_stock_items = 0
    overstock_items = 0
    total_stock = 0
    for line in lines:
        total_items += 1
        total_stock += line.current_stock
        if line.low_stock:
            low_stock_items += 1
        if line.overstock:
            overstock_items += 1

    average_stock = total_stock / total_items if total_items > 0 else 0.0
    return StockSummary(
        total_items=total_items,
        low_stock_items=low_stock_items,
        overstock_items=overstock_items,
        total_stock=total_stock,
        average_stock=average_stock,
    )
