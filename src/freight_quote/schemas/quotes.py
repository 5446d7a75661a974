"""Quote request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import LocationDescriptor, QuoteRecord
from ..services.geocoding.locations import postal_code_matches

CountryCode = Literal["US", "CA", "MX"]
EquipmentTypeName = Literal["dry_van", "reefer", "flatbed", "step_deck", "hotshot", "straight_truck"]


class LocationModel(BaseModel):
    city: str = Field(..., min_length=2, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    state_province: Optional[str] = Field(default=None, max_length=50)
    country: CountryCode

    @field_validator("city", "postal_code", "state_province", "country", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("postal_code")
    @classmethod
    def _check_postal_code(cls, value: Optional[str]) -> Optional[str]:
        if value and not postal_code_matches(value):
            raise ValueError("Invalid postal code format. Use US ZIP, Canadian postal code, or Mexican CP format")
        return value

    def to_descriptor(self) -> LocationDescriptor:
        return LocationDescriptor(
            city=self.city,
            country=self.country,
            postal_code=self.postal_code,
            state_province=self.state_province,
        )


class QuoteRequest(BaseModel):
    origin: LocationModel
    destination: LocationModel
    equipment_type: EquipmentTypeName
    total_weight: float = Field(..., gt=0, description="Total shipment weight in pounds.")
    pickup_date: date

    @field_validator("pickup_date")
    @classmethod
    def _not_in_past(cls, value: date) -> date:
        if value < date.today():
            raise ValueError("Pickup date cannot be in the past")
        return value


class CoordinatesModel(BaseModel):
    latitude: float
    longitude: float


class GeocodingAccuracyModel(BaseModel):
    origin: str
    destination: str


class PricingBreakdownModel(BaseModel):
    base_amount: float
    multiplier: float
    weight_surcharge: float
    minimum_applied: bool


class QuoteModel(BaseModel):
    id: str
    origin_city: str
    origin_postal_code: Optional[str] = None
    origin_state_province: Optional[str] = None
    origin_country: str
    destination_city: str
    destination_postal_code: Optional[str] = None
    destination_state_province: Optional[str] = None
    destination_country: str
    lane: str
    equipment_type: str
    total_weight: Optional[float] = None
    pickup_date: Optional[date] = None
    distance_miles: float
    distance_kilometers: float
    distance_method: str
    quote_amount: float
    origin_coordinates: CoordinatesModel
    destination_coordinates: CoordinatesModel
    geocoding_accuracy: GeocodingAccuracyModel
    pricing_breakdown: Optional[PricingBreakdownModel] = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: QuoteRecord, breakdown: PricingBreakdownModel | None = None) -> "QuoteModel":
        return cls(
            id=record.id,
            origin_city=record.origin.city or "",
            origin_postal_code=record.origin.postal_code,
            origin_state_province=record.origin.state_province,
            origin_country=record.origin.country or "",
            destination_city=record.destination.city or "",
            destination_postal_code=record.destination.postal_code,
            destination_state_province=record.destination.state_province,
            destination_country=record.destination.country or "",
            lane=record.lane,
            equipment_type=record.equipment_type,
            total_weight=record.total_weight,
            pickup_date=record.pickup_date,
            distance_miles=record.distance_miles,
            distance_kilometers=record.distance_kilometers,
            distance_method=record.distance_method,
            quote_amount=record.quote_amount,
            origin_coordinates=CoordinatesModel(
                latitude=record.origin_latitude, longitude=record.origin_longitude
            ),
            destination_coordinates=CoordinatesModel(
                latitude=record.destination_latitude, longitude=record.destination_longitude
            ),
            geocoding_accuracy=GeocodingAccuracyModel(
                origin=record.origin_accuracy, destination=record.destination_accuracy
            ),
            pricing_breakdown=breakdown,
            created_at=record.created_at,
        )


class QuoteResponse(BaseModel):
    success: bool = True
    message: str = "Quote created successfully"
    data: QuoteModel


class PaginationModel(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class QuoteListResponse(BaseModel):
    success: bool = True
    data: List[QuoteModel]
    pagination: PaginationModel
