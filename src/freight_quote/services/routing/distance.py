"""Intercity distance with a driving-route primary and great-circle fallback."""

from __future__ import annotations

import logging
import math

from ...errors import QuoteComputationError, RoutingUnavailable
from ...models.domain import DistanceMethod, DistanceResult, ResolvedPoint
from ..geospatial import haversine_km
from .osrm_client import OSRMClient, RoutingProvider

logger = logging.getLogger(__name__)


class DistanceResolver:
    """Measures the distance between two resolved points.

    The road distance from the routing provider is preferred. When the router
    times out, errors or has no route, the great-circle distance is used and
    the result is tagged ``great_circle``; that is not an error for callers.
    """

    def __init__(self, router: RoutingProvider | None = None) -> None:
        self._router = router

    @property
    def router(self) -> RoutingProvider:
        if self._router is None:
            self._router = OSRMClient()
        return self._router

    def resolve(self, origin: ResolvedPoint, destination: ResolvedPoint) -> DistanceResult:
        if (origin.latitude, origin.longitude) == (destination.latitude, destination.longitude):
            return DistanceResult(kilometers=0.0, method=DistanceMethod.GREAT_CIRCLE)

        driving_km = self.driving_km(origin, destination)
        if driving_km is not None:
            logger.info("Using driving distance: %.2f km", driving_km)
            return DistanceResult(kilometers=driving_km, method=DistanceMethod.DRIVING)

        logger.warning("Falling back to great-circle distance calculation")
        great_circle = self.great_circle_km(origin, destination)
        logger.info("Using great-circle distance: %.2f km", great_circle)
        return DistanceResult(kilometers=great_circle, method=DistanceMethod.GREAT_CIRCLE)

    def driving_km(self, origin: ResolvedPoint, destination: ResolvedPoint) -> float | None:
        """Road distance in kilometers, or None when the router cannot provide one."""
        try:
            meters = self.router.route_distance(
                (origin.latitude, origin.longitude),
                (destination.latitude, destination.longitude),
            )
        except RoutingUnavailable as exc:
            logger.warning("Routing unavailable: %s", exc)
            return None
        except Exception:
            # Any router failure, including OSRMClient() without a base URL
            logger.warning("Routing provider failed", exc_info=True)
            return None
        if meters is None:
            logger.warning("No route found between %s and %s", origin.display_name, destination.display_name)
            return None
        try:
            meters = float(meters)
        except (TypeError, ValueError):
            logger.warning("Routing provider returned a non-numeric distance: %r", meters)
            return None
        if not math.isfinite(meters) or meters < 0:
            logger.warning("Routing provider returned an invalid distance: %r meters", meters)
            return None
        return meters / 1000.0

    @staticmethod
    def great_circle_km(origin: ResolvedPoint, destination: ResolvedPoint) -> float:
        try:
            distance = haversine_km(origin.latitude, origin.longitude, destination.latitude, destination.longitude)
        except (TypeError, ValueError) as exc:
            raise QuoteComputationError(f"Failed to calculate distance: {exc}") from exc
        if not math.isfinite(distance):
            raise QuoteComputationError("Failed to calculate distance: result is not a finite number")
        return max(distance, 0.0)
