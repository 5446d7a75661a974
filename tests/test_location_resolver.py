import pytest

from freight_quote.errors import GeocodingError, InvalidInputError, OutOfRegionError, ProviderError
from freight_quote.models.domain import Accuracy, Country, LocationDescriptor
from freight_quote.services.geocoding.locations import build_query, country_name, postal_code_matches
from freight_quote.services.geocoding.nominatim_client import GeocodeMatch
from freight_quote.services.geocoding.resolver import LocationResolver

TORONTO = GeocodeMatch(latitude=43.6511, longitude=-79.3832, display_name="Toronto, Ontario, Canada")


class DummyGeocoder:
    """Answers from a query -> match table; queries listed in ``failing`` raise."""

    def __init__(self, answers=None, failing=(), error=ProviderError):
        self.answers = answers or {}
        self.failing = set(failing)
        self.error = error
        self.queries: list[str] = []

    def search(self, query):
        self.queries.append(query)
        if query in self.failing:
            raise self.error(f"Geocoding request timed out for '{query}'")
        return self.answers.get(query)


def _toronto(**overrides) -> LocationDescriptor:
    fields = {"city": "Toronto", "postal_code": "M5H 2N2", "state_province": "ON", "country": "CA"}
    fields.update(overrides)
    return LocationDescriptor(**fields)


def test_postal_code_query_tagged_postal_code():
    geocoder = DummyGeocoder({"M5H 2N2, Toronto, ON, Canada": TORONTO})

    point = LocationResolver(geocoder).resolve(_toronto())

    assert point.accuracy == Accuracy.POSTAL_CODE
    assert (point.latitude, point.longitude) == (43.6511, -79.3832)
    assert point.display_name == "Toronto, Ontario, Canada"
    assert geocoder.queries == ["M5H 2N2, Toronto, ON, Canada"]


def test_rejected_postal_code_retries_without_it():
    geocoder = DummyGeocoder({"Toronto, ON, Canada": TORONTO})

    point = LocationResolver(geocoder).resolve(_toronto(postal_code="Z9Z 9Z9"))

    assert point.accuracy == Accuracy.CITY_STATE
    assert geocoder.queries == ["Z9Z 9Z9, Toronto, ON, Canada", "Toronto, ON, Canada"]


def test_failing_postal_code_query_retries_without_it():
    geocoder = DummyGeocoder(
        {"Toronto, ON, Canada": TORONTO},
        failing={"M5H 2N2, Toronto, ON, Canada"},
    )

    point = LocationResolver(geocoder).resolve(_toronto())

    assert point.accuracy == Accuracy.CITY_STATE
    assert len(geocoder.queries) == 2


@pytest.mark.parametrize("error", [TimeoutError, RuntimeError])
def test_unexpected_postal_code_error_still_retries_without_it(error):
    geocoder = DummyGeocoder(
        {"Toronto, ON, Canada": TORONTO},
        failing={"M5H 2N2, Toronto, ON, Canada"},
        error=error,
    )

    point = LocationResolver(geocoder).resolve(_toronto())

    assert point.accuracy == Accuracy.CITY_STATE
    assert geocoder.queries == ["M5H 2N2, Toronto, ON, Canada", "Toronto, ON, Canada"]


def test_unexpected_error_without_postal_code_is_geocoding_error():
    geocoder = DummyGeocoder(failing={"Toronto, ON, Canada"}, error=TimeoutError)

    with pytest.raises(GeocodingError) as exc_info:
        LocationResolver(geocoder).resolve(_toronto(postal_code=None))

    assert exc_info.value.query == "Toronto, ON, Canada"
    assert isinstance(exc_info.value.__cause__, TimeoutError)


def test_retry_happens_only_once():
    geocoder = DummyGeocoder()

    with pytest.raises(GeocodingError) as exc_info:
        LocationResolver(geocoder).resolve(_toronto())

    assert exc_info.value.query == "Toronto, ON, Canada"
    assert len(geocoder.queries) == 2


def test_city_only_without_state():
    geocoder = DummyGeocoder({"Toronto, Canada": TORONTO})

    point = LocationResolver(geocoder).resolve(_toronto(postal_code=None, state_province=None))

    assert point.accuracy == Accuracy.CITY_ONLY
    assert geocoder.queries == ["Toronto, Canada"]


def test_no_match_without_postal_code_is_not_retried():
    geocoder = DummyGeocoder()

    with pytest.raises(GeocodingError, match="Toronto, ON, Canada"):
        LocationResolver(geocoder).resolve(_toronto(postal_code=None))

    assert geocoder.queries == ["Toronto, ON, Canada"]


def test_provider_failure_without_postal_code_is_geocoding_error():
    geocoder = DummyGeocoder(failing={"Toronto, ON, Canada"})

    with pytest.raises(GeocodingError) as exc_info:
        LocationResolver(geocoder).resolve(_toronto(postal_code=None))

    assert isinstance(exc_info.value.__cause__, ProviderError)


@pytest.mark.parametrize(
    "overrides",
    [{"city": None}, {"city": "   "}, {"country": None}, {"country": ""}],
)
def test_missing_city_or_country_is_invalid(overrides):
    geocoder = DummyGeocoder()

    with pytest.raises(InvalidInputError):
        LocationResolver(geocoder).resolve(_toronto(**overrides))

    assert geocoder.queries == []


def test_unsupported_country_is_invalid():
    with pytest.raises(InvalidInputError, match="Country must be one of"):
        LocationResolver(DummyGeocoder()).resolve(_toronto(country="GB"))


def test_country_enum_accepted():
    geocoder = DummyGeocoder({"M5H 2N2, Toronto, ON, Canada": TORONTO})

    point = LocationResolver(geocoder).resolve(_toronto(country=Country.CA))

    assert point.accuracy == Accuracy.POSTAL_CODE


def test_match_outside_north_america_is_rejected():
    london = GeocodeMatch(latitude=42.9849, longitude=81.2453, display_name="London")
    geocoder = DummyGeocoder({"London, ON, Canada": london})

    with pytest.raises(OutOfRegionError) as exc_info:
        LocationResolver(geocoder).resolve(LocationDescriptor(city="London", state_province="ON", country="CA"))

    assert exc_info.value.latitude == 42.9849


def test_bounding_box_edges_are_inside():
    corner = GeocodeMatch(latitude=83.0, longitude=-50.0, display_name="edge")
    geocoder = DummyGeocoder({"Alert, Canada": corner})

    point = LocationResolver(geocoder).resolve(LocationDescriptor(city="Alert", country="CA"))

    assert point.latitude == 83.0


def test_build_query_orders_parts_most_specific_first():
    assert build_query("Austin", "TX", "78701", "US") == "78701, Austin, TX, United States"
    assert build_query("Monterrey", None, None, "MX") == "Monterrey, Mexico"


def test_country_name_falls_back_to_code():
    assert country_name("ca") == "Canada"
    assert country_name("BR") == "BR"


@pytest.mark.parametrize(
    "postal_code, country, expected",
    [
        ("78701", "US", True),
        ("78701-1234", "US", True),
        ("m5h 2n2", "CA", True),
        ("M5H2N2", "CA", False),
        ("64000", "MX", True),
        ("6400", "MX", False),
        ("M5H 2N2", None, True),
        ("ABC", None, False),
    ],
)
def test_postal_code_matches(postal_code, country, expected):
    assert postal_code_matches(postal_code, country) is expected
