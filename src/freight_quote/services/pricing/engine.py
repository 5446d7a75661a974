"""Distance, equipment and weight based pricing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Mapping

from ...errors import InvalidInputError
from ...models.domain import EquipmentType, PricingBreakdown, PricingInputs

DEFAULT_EQUIPMENT_MULTIPLIERS: Mapping[str, float] = {
    EquipmentType.DRY_VAN.value: 1.00,
    EquipmentType.REEFER.value: 1.20,
    EquipmentType.FLATBED.value: 1.15,
    EquipmentType.STEP_DECK.value: 1.20,
    EquipmentType.HOTSHOT.value: 0.85,
    EquipmentType.STRAIGHT_TRUCK.value: 0.95,
}

WEIGHT_INCREMENT_LB = 100


@dataclass(frozen=True, slots=True)
class PricingConfig:
    base_rate_per_mile: float = 2.00
    minimum_quote: float = 100.00
    weight_threshold_lb: float = 10000
    weight_surcharge_per_hundred_lb: float = 0.10
    equipment_multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_EQUIPMENT_MULTIPLIERS)
    )


def round_currency(amount: float) -> float:
    """Round half-up to cents."""
    return float(Decimal(repr(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class PricingEngine:
    """Pure mapping from shipment attributes to a quote amount.

    Pricing runs in a fixed order: distance at the base rate, the equipment
    multiplier, the overweight surcharge, then the minimum quote floor, so
    that a discounting multiplier can never take a short lane below the floor.
    """

    def __init__(self, config: PricingConfig | None = None) -> None:
        self.config = config or PricingConfig()

    def multiplier_for(self, equipment_type: str | EquipmentType) -> float:
        key = equipment_type.value if isinstance(equipment_type, Enum) else str(equipment_type)
        try:
            return float(self.config.equipment_multipliers[key])
        except KeyError:
            allowed = ", ".join(sorted(self.config.equipment_multipliers))
            raise InvalidInputError(f"Unknown equipment type '{key}'. Must be one of: {allowed}") from None

    def weight_surcharge(self, total_weight: float | None) -> float:
        if total_weight is None or total_weight <= self.config.weight_threshold_lb:
            return 0.0
        excess = total_weight - self.config.weight_threshold_lb
        increments = math.ceil(excess / WEIGHT_INCREMENT_LB)
        return increments * self.config.weight_surcharge_per_hundred_lb

    def price(self, inputs: PricingInputs) -> PricingBreakdown:
        if inputs.distance_miles is None or not math.isfinite(inputs.distance_miles) or inputs.distance_miles < 0:
            raise InvalidInputError(f"Distance must be a non-negative number, got {inputs.distance_miles}")
        if inputs.total_weight is not None and (not math.isfinite(inputs.total_weight) or inputs.total_weight < 0):
            raise InvalidInputError(f"Total weight must be a non-negative number, got {inputs.total_weight}")

        multiplier = self.multiplier_for(inputs.equipment_type)
        base_amount = inputs.distance_miles * self.config.base_rate_per_mile
        surcharge = self.weight_surcharge(inputs.total_weight)

        amount = base_amount * multiplier + surcharge
        minimum_applied = amount < self.config.minimum_quote
        amount = max(amount, self.config.minimum_quote)

        return PricingBreakdown(
            base_amount=round_currency(base_amount),
            multiplier=multiplier,
            weight_surcharge=round_currency(surcharge),
            minimum_applied=minimum_applied,
            amount=round_currency(amount),
        )

    def calculate(self, distance_miles: float, equipment_type: str, total_weight: float | None = None) -> float:
        """Return just the quote amount for the given shipment."""
        return self.price(PricingInputs(distance_miles, equipment_type, total_weight)).amount
