from datetime import date
from decimal import Decimal

import pytest

from smart_restock.config import reset_config, set_config_for_test
from smart_restock.data.models import InventoryLine, ProductCost, Promotion

TODAY = date(2024, 7, 15)


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from defaults, unaffected by a developer's .env or environment."""
    for var in [
        "LOG_LEVEL", "DATA_DIR", "DEFAULT_UNIT_COST", "DEFAULT_SUPPLIER_ID", "MINIMUM_RESTOCK_QUANTITY",
        "DEFAULT_CONFIDENCE", "PROMOTION_MATCH_STRATEGY", "ANALYSIS_PERIOD_DAYS", "INCLUDE_PROMOTIONS",
    ]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test(_env_file=None, log_level="WARNING")
    yield
    reset_config()


def make_line(current, minimum=10, maximum=100, reserved=0, product_id="prod-1", **kwargs):
    return InventoryLine(
        store_id=kwargs.pop("store_id", "store-1"),
        product_id=product_id,
        variant_id=kwargs.pop("variant_id", f"{product_id}-var"),
        current_stock=current,
        minimum_stock=minimum,
        maximum_stock=maximum,
        reserved_stock=reserved,
        **kwargs,
    )


def make_promotion(promo_id="promo-1", discount_value="10", **kwargs):
    fields = dict(
        id=promo_id,
        supplier_id="supplier-1",
        scope="product",
        discount_type="percentage",
        discount_value=Decimal(discount_value),
        start_date=date(2024, 6, 1),
        end_date=date(2024, 8, 31),
        product_id="prod-1",
    )
    fields.update(kwargs)
    return Promotion(**fields)


def make_cost(product_id="prod-1", unit_cost="10000", supplier_id="supplier-1", variant_id=None):
    return ProductCost(
        product_id=product_id,
        variant_id=variant_id or f"{product_id}-var",
        supplier_id=supplier_id,
        unit_cost=Decimal(unit_cost),
    )
