import threading
from datetime import date

import pytest

from freight_quote.errors import GeocodingError, InvalidInputError, OutOfRegionError, RoutingUnavailable
from freight_quote.models.domain import Accuracy, DistanceMethod, LocationDescriptor
from freight_quote.services.geocoding.nominatim_client import GeocodeMatch
from freight_quote.services.geocoding.resolver import LocationResolver
from freight_quote.services.pricing.engine import PricingConfig, PricingEngine
from freight_quote.services.quotes.service import QuoteService, build_quote_record
from freight_quote.services.routing.distance import DistanceResolver

TORONTO = LocationDescriptor(city="Toronto", postal_code="M5H 2N2", state_province="ON", country="CA")
VANCOUVER = LocationDescriptor(city="Vancouver", postal_code="V6B 1A1", state_province="BC", country="CA")

MATCHES = {
    "M5H 2N2, Toronto, ON, Canada": GeocodeMatch(43.6511, -79.3832, "Toronto, Ontario, Canada"),
    "V6B 1A1, Vancouver, BC, Canada": GeocodeMatch(49.2808, -123.1150, "Vancouver, British Columbia, Canada"),
}


class DummyGeocoder:
    def __init__(self, answers):
        self.answers = answers
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        return self.answers.get(query)


class DummyRouter:
    def __init__(self, meters=None, error=None):
        self.meters = meters
        self.error = error

    def route_distance(self, origin, destination):
        if self.error is not None:
            raise self.error
        return self.meters


class DestinationFirstGeocoder:
    """Finds nothing, and holds origin queries until a destination query has failed."""

    def __init__(self):
        self.destination_seen = threading.Event()

    def search(self, query):
        if "Vancouver" in query:
            self.destination_seen.set()
        else:
            self.destination_seen.wait(timeout=5)
        return None


def _service(answers=MATCHES, router=None) -> tuple[QuoteService, DummyGeocoder]:
    geocoder = DummyGeocoder(answers)
    service = QuoteService(
        location_resolver=LocationResolver(geocoder),
        distance_resolver=DistanceResolver(router or DummyRouter(meters=3_362_000)),
        pricing_engine=PricingEngine(PricingConfig()),
    )
    return service, geocoder


def test_toronto_to_vancouver_dry_van():
    service, geocoder = _service()

    result = service.compute_quote(TORONTO, VANCOUVER, "dry_van", total_weight=10000)

    assert result.distance.method == DistanceMethod.DRIVING
    assert result.distance.kilometers == pytest.approx(3362.0)
    assert result.distance.miles == pytest.approx(2089.05, abs=0.01)
    assert result.breakdown.weight_surcharge == 0.0
    assert result.breakdown.minimum_applied is False
    assert result.amount == 4178.10
    assert result.origin.accuracy == Accuracy.POSTAL_CODE
    assert result.destination.accuracy == Accuracy.POSTAL_CODE
    assert sorted(geocoder.queries) == sorted(MATCHES)


def test_routing_timeout_yields_great_circle_quote():
    service, _ = _service(router=DummyRouter(error=RoutingUnavailable("timed out")))

    result = service.compute_quote(TORONTO, VANCOUVER, "dry_van", total_weight=10000)

    assert result.distance.method == DistanceMethod.GREAT_CIRCLE
    assert result.distance.kilometers == pytest.approx(3362, rel=0.02)
    assert result.amount == pytest.approx(result.distance.miles * 2.00, abs=0.01)


def test_same_location_costs_minimum_quote():
    service, _ = _service()

    result = service.compute_quote(TORONTO, TORONTO, "reefer")

    assert result.distance.kilometers == 0.0
    assert result.distance.method == DistanceMethod.GREAT_CIRCLE
    assert result.amount == 100.00


def test_destination_not_found_names_the_side():
    answers = {"M5H 2N2, Toronto, ON, Canada": MATCHES["M5H 2N2, Toronto, ON, Canada"]}
    service, _ = _service(answers=answers)

    with pytest.raises(GeocodingError) as exc_info:
        service.compute_quote(TORONTO, VANCOUVER, "dry_van")

    assert exc_info.value.side == "destination"
    assert exc_info.value.query == "Vancouver, BC, Canada"
    assert "destination" in str(exc_info.value)


def test_both_sides_failing_reports_origin():
    service = QuoteService(
        location_resolver=LocationResolver(DestinationFirstGeocoder()),
        distance_resolver=DistanceResolver(DummyRouter(meters=3_362_000)),
        pricing_engine=PricingEngine(PricingConfig()),
    )

    for _ in range(5):
        with pytest.raises(GeocodingError) as exc_info:
            service.compute_quote(TORONTO, VANCOUVER, "dry_van")

        assert exc_info.value.side == "origin"
        assert exc_info.value.query == "Toronto, ON, Canada"


def test_origin_out_of_region_names_the_side():
    answers = dict(MATCHES)
    answers["M5H 2N2, Toronto, ON, Canada"] = GeocodeMatch(-37.8136, 144.9631, "Toronto, New South Wales, Australia")
    service, _ = _service(answers=answers)

    with pytest.raises(OutOfRegionError) as exc_info:
        service.compute_quote(TORONTO, VANCOUVER, "dry_van")

    assert exc_info.value.side == "origin"


def test_missing_city_names_the_side():
    service, _ = _service()

    with pytest.raises(InvalidInputError, match="Destination location"):
        service.compute_quote(TORONTO, LocationDescriptor(city="", country="CA"), "dry_van")


def test_unknown_equipment_rejected_before_geocoding():
    service, geocoder = _service()

    with pytest.raises(InvalidInputError):
        service.compute_quote(TORONTO, VANCOUVER, "box_truck")

    assert geocoder.queries == []


def test_build_quote_record_flattens_result():
    service, _ = _service()
    result = service.compute_quote(TORONTO, VANCOUVER, "flatbed", total_weight=12000)

    record = build_quote_record(result, TORONTO, VANCOUVER, pickup_date=date(2030, 1, 15))

    assert record.lane == "Toronto, ON → Vancouver, BC"
    assert record.equipment_type == "flatbed"
    assert record.distance_kilometers == 3362.0
    assert record.distance_miles == 2089.05
    assert record.distance_method == "driving"
    assert record.origin_accuracy == "postal_code"
    assert record.quote_amount == result.amount
    assert record.pickup_date == date(2030, 1, 15)
    assert record.created_at == result.computed_at
