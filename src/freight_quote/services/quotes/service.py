"""Quote orchestration service."""

from __future__ import annotations

import logging
import math
import uuid
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import date
from typing import Optional

from ...config import settings
from ...errors import GeocodingError, InvalidInputError, OutOfRegionError
from ...models.domain import (
    LocationDescriptor,
    PricingInputs,
    QuoteRecord,
    QuoteResult,
    ResolvedPoint,
    format_lane,
)
from ...persistence.quotes import QuoteRepository
from ...schemas.quotes import (
    PaginationModel,
    PricingBreakdownModel,
    QuoteListResponse,
    QuoteModel,
    QuoteRequest,
    QuoteResponse,
)
from ..geocoding.resolver import LocationResolver
from ..pricing.engine import PricingEngine
from ..routing.distance import DistanceResolver

logger = logging.getLogger(__name__)

SIDES = ("origin", "destination")


def _tag_side(exc: Exception, side: str) -> Exception:
    if isinstance(exc, (GeocodingError, OutOfRegionError)):
        return exc.for_side(side)
    if isinstance(exc, InvalidInputError):
        return InvalidInputError(f"{side.capitalize()} location: {exc}")
    return exc


class QuoteService:
    """Runs the quote pipeline: resolve both locations, measure, price."""

    def __init__(
        self,
        location_resolver: LocationResolver | None = None,
        distance_resolver: DistanceResolver | None = None,
        pricing_engine: PricingEngine | None = None,
    ) -> None:
        self.location_resolver = location_resolver or LocationResolver()
        self.distance_resolver = distance_resolver or DistanceResolver()
        self.pricing_engine = pricing_engine or PricingEngine()

    def resolve_locations(
        self, origin: LocationDescriptor, destination: LocationDescriptor
    ) -> tuple[ResolvedPoint, ResolvedPoint]:
        """Geocode origin and destination concurrently.

        The first failure cancels whatever has not started yet. The error is
        raised tagged with its side; when both sides fail, origin wins.
        """
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="geocode")
        try:
            futures = {
                executor.submit(self.location_resolver.resolve, location): side
                for side, location in zip(SIDES, (origin, destination))
            }
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            if any(future.exception() is not None for future in done):
                for other in pending:
                    other.cancel()
                # Report in origin, destination order when both sides fail
                for future, side in futures.items():
                    if future.cancelled():
                        continue
                    exc = future.exception()
                    if exc is None:
                        continue
                    tagged = _tag_side(exc, side)
                    if tagged is exc:
                        raise exc
                    raise tagged from exc
            resolved = {side: future.result() for future, side in futures.items()}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
        return resolved["origin"], resolved["destination"]

    def compute_quote(
        self,
        origin: LocationDescriptor,
        destination: LocationDescriptor,
        equipment_type: str,
        total_weight: Optional[float] = None,
    ) -> QuoteResult:
        # Reject a bad equipment type before spending any provider calls on it.
        self.pricing_engine.multiplier_for(equipment_type)

        origin_point, destination_point = self.resolve_locations(origin, destination)
        distance = self.distance_resolver.resolve(origin_point, destination_point)

        inputs = PricingInputs(
            distance_miles=distance.miles,
            equipment_type=equipment_type,
            total_weight=total_weight,
        )
        breakdown = self.pricing_engine.price(inputs)
        logger.info(
            "Quoted %.2f for %.2f mi (%s, %s)",
            breakdown.amount,
            distance.miles,
            distance.method.value,
            equipment_type,
        )
        return QuoteResult(
            origin=origin_point,
            destination=destination_point,
            distance=distance,
            pricing=inputs,
            breakdown=breakdown,
        )


def build_quote_record(
    result: QuoteResult,
    origin: LocationDescriptor,
    destination: LocationDescriptor,
    pickup_date: Optional[date] = None,
) -> QuoteRecord:
    """Flatten a computed quote into the record handed to the quote store."""
    return QuoteRecord(
        id=str(uuid.uuid4()),
        origin=origin,
        destination=destination,
        origin_latitude=result.origin.latitude,
        origin_longitude=result.origin.longitude,
        destination_latitude=result.destination.latitude,
        destination_longitude=result.destination.longitude,
        origin_accuracy=result.origin.accuracy.value,
        destination_accuracy=result.destination.accuracy.value,
        lane=format_lane(origin, destination),
        equipment_type=getattr(result.pricing.equipment_type, "value", result.pricing.equipment_type),
        total_weight=result.pricing.total_weight,
        pickup_date=pickup_date,
        distance_miles=round(result.distance.miles, 2),
        distance_kilometers=round(result.distance.kilometers, 2),
        distance_method=result.distance.method.value,
        quote_amount=result.amount,
        created_at=result.computed_at,
    )


def build_quote_service() -> QuoteService:
    """Wire the pipeline with the configured providers and pricing table."""
    return QuoteService(pricing_engine=PricingEngine(settings.pricing_config()))


def create_quote(payload: QuoteRequest) -> QuoteResponse:
    origin = payload.origin.to_descriptor()
    destination = payload.destination.to_descriptor()

    result = build_quote_service().compute_quote(
        origin,
        destination,
        equipment_type=payload.equipment_type,
        total_weight=payload.total_weight,
    )
    record = build_quote_record(result, origin, destination, pickup_date=payload.pickup_date)
    QuoteRepository().save(record)

    breakdown = PricingBreakdownModel(
        base_amount=result.breakdown.base_amount,
        multiplier=result.breakdown.multiplier,
        weight_surcharge=result.breakdown.weight_surcharge,
        minimum_applied=result.breakdown.minimum_applied,
    )
    return QuoteResponse(data=QuoteModel.from_record(record, breakdown))


def list_quotes(page: int = 1, limit: int = 10) -> QuoteListResponse:
    records, total = QuoteRepository().list(page=page, limit=limit)
    return QuoteListResponse(
        data=[QuoteModel.from_record(record) for record in records],
        pagination=PaginationModel(
            page=page,
            limit=limit,
            total=total,
            totalPages=math.ceil(total / limit) if limit else 0,
        ),
    )


def get_quote(quote_id: str) -> QuoteModel | None:
    record = QuoteRepository().get(quote_id)
    return QuoteModel.from_record(record) if record else None
