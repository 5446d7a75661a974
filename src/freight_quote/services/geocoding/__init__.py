"""Location resolution services."""

from .locations import build_query, country_name, postal_code_matches
from .nominatim_client import GeocodeMatch, GeocodingProvider, NominatimClient
from .resolver import LocationResolver

__all__ = [
    "GeocodeMatch",
    "GeocodingProvider",
    "LocationResolver",
    "NominatimClient",
    "build_query",
    "country_name",
    "postal_code_matches",
]
