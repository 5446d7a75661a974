"""Exceptions raised by the quote engine."""

from __future__ import annotations


class QuoteEngineError(Exception):
    """Base exception for all quote engine errors."""


class InvalidInputError(QuoteEngineError):
    """Raised when a location descriptor or shipment attribute is unusable."""


class GeocodingError(QuoteEngineError):
    """Raised when the geocoding provider has no match for a location."""

    def __init__(self, query: str, side: str | None = None):
        self.query = query
        self.side = side
        super().__init__(self._message())

    def _message(self) -> str:
        prefix = f"Failed to geocode {self.side} location" if self.side else "Could not geocode location"
        return f"{prefix}: {self.query}"

    def for_side(self, side: str) -> "GeocodingError":
        return GeocodingError(self.query, side=side)


class OutOfRegionError(QuoteEngineError):
    """Raised when resolved coordinates fall outside North America."""

    def __init__(self, latitude: float, longitude: float, side: str | None = None):
        self.latitude = latitude
        self.longitude = longitude
        self.side = side
        location = f"{side} location" if side else "Location"
        super().__init__(
            f"{location.capitalize()} is outside the supported region. "
            f"Only US, Canada, and Mexico are supported. "
            f"Coordinates: {latitude}, {longitude}"
        )

    def for_side(self, side: str) -> "OutOfRegionError":
        return OutOfRegionError(self.latitude, self.longitude, side=side)


class ProviderError(QuoteEngineError):
    """Raised by provider clients on transport failures, timeouts or bad payloads."""


class RoutingUnavailable(ProviderError):
    """Raised when the routing provider cannot answer; triggers the great-circle fallback."""


class QuoteComputationError(QuoteEngineError):
    """Raised when no distance could be computed by any method."""
