"""Resolve location descriptors to North American coordinates."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ...errors import GeocodingError, InvalidInputError, OutOfRegionError
from ...models.domain import Accuracy, Country, LocationDescriptor, ResolvedPoint
from ..geospatial import is_within_north_america
from .locations import build_query
from .nominatim_client import GeocodeMatch, GeocodingProvider, NominatimClient

logger = logging.getLogger(__name__)

SUPPORTED_COUNTRIES = {country.value for country in Country}


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    text = str(value).strip()
    return text or None


class LocationResolver:
    """Turns a :class:`LocationDescriptor` into a :class:`ResolvedPoint`.

    A postal code gives the most precise point, but a mistyped one must not
    block quoting: when the postal-code query errors or finds nothing, the
    resolver retries once with city, state/province and country only.
    """

    def __init__(self, provider: GeocodingProvider | None = None) -> None:
        self.provider = provider or NominatimClient()

    def resolve(self, location: LocationDescriptor) -> ResolvedPoint:
        city = _clean(location.city)
        country = _clean(location.country)
        if not city or not country:
            raise InvalidInputError("City and country are required for geocoding")
        country = country.upper()
        if country not in SUPPORTED_COUNTRIES:
            raise InvalidInputError(f"Country must be one of {', '.join(sorted(SUPPORTED_COUNTRIES))}, got '{country}'")

        postal_code = _clean(location.postal_code)
        state_province = _clean(location.state_province)
        query = build_query(city, state_province, postal_code, country)

        match: GeocodeMatch | None = None
        used_postal_code = False
        if postal_code:
            try:
                match = self.provider.search(query)
            except Exception as exc:
                logger.warning("Geocoding with postal code failed, trying without: %s", exc)
            else:
                if match is None:
                    logger.warning("No match for '%s', trying without postal code", query)
            if match is not None:
                used_postal_code = True
            else:
                query = build_query(city, state_province, None, country)
                match = self._search(query)
        else:
            match = self._search(query)

        if match is None:
            raise GeocodingError(query)

        if not is_within_north_america(match.latitude, match.longitude):
            raise OutOfRegionError(match.latitude, match.longitude)

        if used_postal_code:
            accuracy = Accuracy.POSTAL_CODE
        elif state_province:
            accuracy = Accuracy.CITY_STATE
        else:
            accuracy = Accuracy.CITY_ONLY

        return ResolvedPoint(
            latitude=match.latitude,
            longitude=match.longitude,
            accuracy=accuracy,
            display_name=match.display_name,
        )

    def _search(self, query: str) -> GeocodeMatch | None:
        try:
            return self.provider.search(query)
        except Exception as exc:
            logger.warning("Geocoding failed for '%s': %s", query, exc)
            raise GeocodingError(query) from exc
