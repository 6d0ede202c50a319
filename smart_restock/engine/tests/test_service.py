import threading
from datetime import date
from decimal import Decimal

import pytest

from smart_restock.conftest import TODAY, make_cost, make_line, make_promotion
from smart_restock.data.backends.memory_backend import InMemoryRestockDataAccess
from smart_restock.data.models import AnalysisScope
from smart_restock.engine.errors import AnalysisCancelledError, EmptySelectionError, InvalidInputError
from smart_restock.engine.service import SmartRestockService

SCOPE = AnalysisScope(store_id="store-1")


@pytest.fixture
def service():
    return SmartRestockService()


class TestScenarios:
    def test_stockout_line_is_urgent(self, service):
        result = service.analyze(SCOPE, [make_line(0, minimum=10, maximum=100)], now=TODAY)
        [rec] = result.categorized.urgent
        assert rec.urgency_score == 100
        assert rec.risk_level == "high"
        assert rec.recommended_quantity == 10

    def test_line_above_minimum_gets_no_recommendation(self, service):
        result = service.analyze(SCOPE, [make_line(15, minimum=10, maximum=50)], now=TODAY)
        assert result.categorized.flatten() == []
        assert result.summary.total_items == 1
        assert result.summary.low_stock_items == 0

    def test_promotion_adjusted_cost_and_order(self, service):
        result = service.analyze(
            AnalysisScope(store_id="store-1", supplier_id="supplier-1"),
            [make_line(5, minimum=10)],
            promotions=[make_promotion(discount_value="10")],
            cost_lookup=InMemoryRestockDataAccess(product_costs=[make_cost(unit_cost="10000")]),
            now=TODAY,
        )
        [rec] = result.categorized.high_priority
        assert rec.recommended_quantity * rec.unit_cost == Decimal("50000")
        assert rec.estimated_cost == Decimal("45000")
        assert result.totals.estimated_cost == Decimal("45000")

        draft = service.materialize_order("supplier-1", [rec])
        assert draft.total_items == 5
        assert draft.total_cost == Decimal("45000")
        assert draft.status == "pending"

    def test_empty_snapshot(self, service):
        result = service.analyze(SCOPE, [], now=TODAY)
        assert result.summary.model_dump() == {
            "total_items": 0,
            "low_stock_items": 0,
            "overstock_items": 0,
            "total_stock": 0,
            "average_stock": 0,
        }
        assert result.categorized.flatten() == []
        assert result.totals.estimated_cost == 0
        assert result.totals.total_recommended_items == 0

    def test_empty_order_guard(self, service):
        with pytest.raises(EmptySelectionError):
            service.materialize_order("supplier-1", [])


class TestAnalyze:
    def test_mixed_snapshot(self, service):
        lines = [
            make_line(5, minimum=10, maximum=100, product_id="prod-1"),
            make_line(15, minimum=10, maximum=50, reserved=2, product_id="prod-2"),
            make_line(120, minimum=10, maximum=100, product_id="prod-3"),
            make_line(1, minimum=20, maximum=100, product_id="prod-4"),
            make_line(8, minimum=10, maximum=100, product_id="prod-5"),
        ]
        result = service.analyze(SCOPE, lines, now=TODAY)
        assert [r.product_id for r in result.categorized.urgent] == ["prod-4"]
        assert [r.product_id for r in result.categorized.high_priority] == ["prod-1"]
        assert [r.product_id for r in result.categorized.medium_priority] == ["prod-5"]
        assert result.categorized.low_priority == []
        # 19 + 5 + 5 units at the default cost of 10
        assert result.totals.total_recommended_items == 29
        assert result.totals.estimated_cost == Decimal("290")
        assert result.narrative.confidence_score == 0.85
        assert "3 items require immediate restocking and 1 items are overstocked" in result.narrative.summary_text

    def test_identical_input_gives_identical_output(self, service):
        lines = [make_line(i % 7, minimum=10, product_id=f"p{i}") for i in range(20)]
        assert service.analyze(SCOPE, lines, now=TODAY) == service.analyze(SCOPE, lines, now=TODAY)

    @pytest.mark.parametrize(
        "line",
        [
            make_line(-1),
            make_line(5, minimum=-10),
            make_line(5, maximum=-1),
            make_line(3, reserved=4),
        ],
    )
    def test_impossible_inventory_is_rejected(self, service, line):
        with pytest.raises(InvalidInputError):
            service.analyze(SCOPE, [line], now=TODAY)

    def test_inverted_promotion_window_is_rejected(self, service):
        promo = make_promotion(start_date=date(2024, 9, 1), end_date=date(2024, 6, 1))
        with pytest.raises(InvalidInputError, match="before it starts"):
            service.analyze(SCOPE, [make_line(0)], promotions=[promo], now=TODAY)

    def test_negative_discount_is_rejected(self, service):
        with pytest.raises(InvalidInputError, match="negative discount"):
            service.analyze(SCOPE, [make_line(0)], promotions=[make_promotion(discount_value="-5")], now=TODAY)

    def test_cancelled_analysis(self, service):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(AnalysisCancelledError):
            service.analyze(SCOPE, [make_line(0)], now=TODAY, cancel_event=cancel)

    def test_custom_confidence_and_period(self):
        service = SmartRestockService(analysis_period=7, confidence_source=lambda summary, categorized: 0.5)
        result = service.analyze(SCOPE, [make_line(0)], now=TODAY)
        assert result.narrative.confidence_score == 0.5
        assert result.narrative.summary_text.startswith("Based on 7 days")


class TestProviderBackedAnalysis:
    @pytest.fixture
    def data_access(self):
        return InMemoryRestockDataAccess(
            inventory=[
                make_line(0, product_id="prod-1", store_id="store-1"),
                make_line(4, product_id="prod-2", store_id="store-1"),
                make_line(50, product_id="prod-3", store_id="store-1"),
                make_line(1, product_id="prod-1", store_id="store-2"),
            ],
            promotions=[
                make_promotion("promo-s1", supplier_id="supplier-1", product_id="prod-1", discount_value="20"),
                make_promotion("promo-s2", supplier_id="supplier-2", product_id="prod-2", discount_value="50"),
            ],
            product_costs=[
                make_cost("prod-1", unit_cost="2", supplier_id="supplier-1"),
                make_cost("prod-2", unit_cost="3", supplier_id="supplier-2"),
                make_cost("prod-3", unit_cost="4", supplier_id="supplier-1"),
            ],
        )

    def test_analyze_store(self, service, data_access):
        result = service.analyze_store(SCOPE, data_access, now=TODAY)
        assert result.summary.total_items == 3
        recs = {r.product_id: r for r in result.categorized.flatten()}
        assert recs["prod-1"].estimated_cost == Decimal("16")     # 10 units * 2, 20% off
        assert recs["prod-1"].supplier_id == "supplier-1"
        assert recs["prod-2"].estimated_cost == Decimal("9")      # 6 units * 3, 50% off
        assert recs["prod-2"].supplier_id == "supplier-2"

    def test_supplier_scope_limits_products_and_promotions(self, service, data_access):
        scope = AnalysisScope(store_id="store-1", supplier_id="supplier-1")
        result = service.analyze_store(scope, data_access, now=TODAY)
        assert result.summary.total_items == 2
        assert [r.product_id for r in result.categorized.flatten()] == ["prod-1"]

    def test_promotions_can_be_skipped(self, service, data_access):
        result = service.analyze_store(SCOPE, data_access, include_promotions=False, now=TODAY)
        assert all(r.applied_promotion is None for r in result.categorized.flatten())

    def test_analyze_many_keeps_scope_order(self, service, data_access):
        scopes = [AnalysisScope(store_id="store-2"), AnalysisScope(store_id="store-1"), AnalysisScope(store_id="store-3")]
        results = service.analyze_many(scopes, data_access, max_workers=3, now=TODAY)
        assert [r.scope.store_id for r in results] == ["store-2", "store-1", "store-3"]
        assert [r.summary.total_items for r in results] == [1, 3, 0]

    def test_create_order_from_analysis(self, service, data_access):
        scope = AnalysisScope(store_id="store-1", supplier_id="supplier-1")
        result = service.analyze_store(scope, data_access, now=TODAY)
        draft = service.create_order_from_analysis(result)
        assert draft.supplier_id == "supplier-1"
        assert draft.store_id == "store-1"
        assert draft.total_items == 10
        assert draft.total_cost == Decimal("16")

    def test_unscoped_analysis_orders_only_the_suppliers_lines(self, service, data_access):
        result = service.analyze_store(SCOPE, data_access, now=TODAY)

        first = service.create_order_from_analysis(result, supplier_id="supplier-1")
        assert [(i.product_id, i.quantity, i.line_cost) for i in first.items] == [("prod-1", 10, Decimal("16"))]

        second = service.create_order_from_analysis(result, supplier_id="supplier-2")
        assert [(i.product_id, i.quantity, i.line_cost) for i in second.items] == [("prod-2", 6, Decimal("9"))]

        with pytest.raises(EmptySelectionError):
            service.create_order_from_analysis(result, supplier_id="supplier-3")

    def test_lines_without_supplier_go_to_any_order(self, service):
        result = service.analyze(SCOPE, [make_line(0)], now=TODAY)
        draft = service.create_order_from_analysis(result, supplier_id="supplier-7")
        assert [i.product_id for i in draft.items] == ["prod-1"]

    def test_order_needs_a_supplier(self, service, data_access):
        result = service.analyze_store(SCOPE, data_access, now=TODAY)
        with pytest.raises(InvalidInputError):
            service.create_order_from_analysis(result)

    def test_order_from_healthy_store_is_rejected(self, service, data_access):
        scope = AnalysisScope(store_id="store-3", supplier_id="supplier-1")
        result = service.analyze_store(scope, data_access, now=TODAY)
        with pytest.raises(EmptySelectionError):
            service.create_order_from_analysis(result)
