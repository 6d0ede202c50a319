from decimal import Decimal

import pytest
from pydantic import ValidationError

from smart_restock.config import AppConfig, get_config, reset_config, set_config_for_test
from smart_restock.logging import get_logger


def test_defaults():
    config = get_config()
    assert config.analysis_period_days == 30
    assert config.default_unit_cost == Decimal("10")
    assert config.minimum_restock_quantity == 5
    assert config.default_confidence == 0.85
    assert config.promotion_match_strategy == "first"
    assert config.default_supplier_id is None


def test_singleton():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PROMOTION_MATCH_STRATEGY", "best")
    monkeypatch.setenv("DEFAULT_UNIT_COST", "12.75")
    reset_config()
    config = get_config()
    assert config.promotion_match_strategy == "best"
    assert config.default_unit_cost == Decimal("12.75")


def test_override_for_test():
    set_config_for_test(_env_file=None, analysis_period_days=90)
    assert get_config().analysis_period_days == 90


def test_invalid_strategy_rejected():
    with pytest.raises(ValidationError):
        AppConfig(_env_file=None, promotion_match_strategy="cheapest")


def test_logger_binds_name():
    logger = get_logger("smart_restock.tests")
    logger.warning("logger configured")
