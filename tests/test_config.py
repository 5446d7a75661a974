import pytest

from freight_quote.config import Settings
from freight_quote.services.pricing.engine import DEFAULT_EQUIPMENT_MULTIPLIERS


def test_defaults_match_standard_rate_table(monkeypatch: pytest.MonkeyPatch):
    for name in ("FQ_BASE_RATE_PER_MILE", "FQ_MINIMUM_QUOTE", "FQ_EQUIPMENT_MULTIPLIERS"):
        monkeypatch.delenv(name, raising=False)

    pricing = Settings(_env_file=None).pricing_config()

    assert pricing.base_rate_per_mile == 2.00
    assert pricing.minimum_quote == 100.00
    assert pricing.weight_threshold_lb == 10000
    assert pricing.weight_surcharge_per_hundred_lb == 0.10
    assert dict(pricing.equipment_multipliers) == dict(DEFAULT_EQUIPMENT_MULTIPLIERS)


def test_pricing_read_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FQ_BASE_RATE_PER_MILE", "2.5")
    monkeypatch.setenv("FQ_MINIMUM_QUOTE", "150")
    monkeypatch.setenv("FQ_EQUIPMENT_MULTIPLIERS", '{"hotshot": 0.9}')

    pricing = Settings(_env_file=None).pricing_config()

    assert pricing.base_rate_per_mile == 2.5
    assert pricing.minimum_quote == 150.0
    assert pricing.equipment_multipliers["hotshot"] == 0.9
    # omitted equipment types keep their defaults
    assert pricing.equipment_multipliers["reefer"] == 1.20


def test_multipliers_accept_json_string():
    settings = Settings(_env_file=None, equipment_multipliers='{"reefer": 1.3}')

    assert settings.equipment_multipliers["reefer"] == 1.3
    assert settings.equipment_multipliers["dry_van"] == 1.0


def test_allowed_origins_from_json_list():
    settings = Settings(_env_file=None, frontend_allowed_origins='["http://a.test", "http://b.test"]')

    assert settings.frontend_allowed_origins == ("http://a.test", "http://b.test")
