"""Domain models for locations, distances and quotes."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

KM_TO_MILES = 0.621371


class Country(str, Enum):
    US = "US"
    CA = "CA"
    MX = "MX"


class Accuracy(str, Enum):
    POSTAL_CODE = "postal_code"
    CITY_STATE = "city_state"
    CITY_ONLY = "city_only"


class DistanceMethod(str, Enum):
    DRIVING = "driving"
    GREAT_CIRCLE = "great_circle"


class EquipmentType(str, Enum):
    DRY_VAN = "dry_van"
    REEFER = "reefer"
    FLATBED = "flatbed"
    STEP_DECK = "step_deck"
    HOTSHOT = "hotshot"
    STRAIGHT_TRUCK = "straight_truck"


@dataclass(frozen=True, slots=True)
class LocationDescriptor:
    """Free-form location input as entered by the shipper."""

    city: Optional[str]
    country: Optional[str]
    postal_code: Optional[str] = None
    state_province: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ResolvedPoint:
    """Geocoded coordinates plus how much of the descriptor was used to find them."""

    latitude: float
    longitude: float
    accuracy: Accuracy
    display_name: str = ""


@dataclass(frozen=True, slots=True)
class DistanceResult:
    kilometers: float
    method: DistanceMethod

    @property
    def miles(self) -> float:
        return self.kilometers * KM_TO_MILES


@dataclass(frozen=True, slots=True)
class PricingInputs:
    distance_miles: float
    equipment_type: str
    total_weight: Optional[float] = None


@dataclass(frozen=True, slots=True)
class PricingBreakdown:
    """Intermediate amounts of a priced shipment, in pricing order."""

    base_amount: float
    multiplier: float
    weight_surcharge: float
    minimum_applied: bool
    amount: float


@dataclass(frozen=True, slots=True)
class QuoteResult:
    origin: ResolvedPoint
    destination: ResolvedPoint
    distance: DistanceResult
    pricing: PricingInputs
    breakdown: PricingBreakdown
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def amount(self) -> float:
        return self.breakdown.amount


@dataclass(slots=True)
class QuoteRecord:
    """Stored form of a computed quote."""

    id: str
    origin: LocationDescriptor
    destination: LocationDescriptor
    origin_latitude: float
    origin_longitude: float
    destination_latitude: float
    destination_longitude: float
    origin_accuracy: str
    destination_accuracy: str
    lane: str
    equipment_type: str
    total_weight: Optional[float]
    pickup_date: Optional[date]
    distance_miles: float
    distance_kilometers: float
    distance_method: str
    quote_amount: float
    created_at: datetime


def format_lane(origin: LocationDescriptor, destination: LocationDescriptor) -> str:
    """Return a human readable lane such as ``"Toronto, ON → Vancouver, BC"``."""

    def _side(location: LocationDescriptor) -> str:
        return f"{location.city}, {location.state_province or ''}".rstrip(", ")

    return f"{_side(origin)} → {_side(destination)}"
