"""Pricing engine exports."""

from .engine import DEFAULT_EQUIPMENT_MULTIPLIERS, PricingConfig, PricingEngine, round_currency

__all__ = ["DEFAULT_EQUIPMENT_MULTIPLIERS", "PricingConfig", "PricingEngine", "round_currency"]
