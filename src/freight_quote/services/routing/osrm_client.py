"""HTTP client for interacting with OSRM services."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from ...config import settings
from ...errors import RoutingUnavailable

logger = logging.getLogger(__name__)

Coordinate = tuple[float, float]


class RoutingProvider(Protocol):
    def route_distance(self, origin: Coordinate, destination: Coordinate) -> float | None:
        """Return the driving distance in meters, or None when no route exists.

        Transport failures and timeouts are signalled with RoutingUnavailable.
        """
        ...


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.routing_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        # Connect and read share the same bound so a slow router cannot stall a quote.
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        )

    def route_distance(self, origin: Coordinate, destination: Coordinate) -> float | None:
        """Get the driving distance between two (lat, lon) points using the OSRM route endpoint.

        Returns:
            Route length in meters, or None when OSRM reports no route.

        Raises:
            RoutingUnavailable: on timeouts, connection failures, HTTP errors or
                malformed responses.
        """
        # OSRM route endpoint expects coordinates as "lon,lat;lon,lat"
        coordinate_str = ";".join(f"{lon},{lat}" for lat, lon in (origin, destination))
        params = {
            "overview": "false",  # distance only, no geometry
            "steps": "false",
        }
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinate_str}"

        client = self._get_client()
        try:
            response = client.get(url, params=params)
            if response.status_code == 400:
                # OSRM answers NoRoute/NoSegment with a 400 and a JSON body
                data = response.json()
            else:
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as exc:
            logger.warning("OSRM route request timed out after %.1fs", self.timeout)
            raise RoutingUnavailable(f"OSRM route request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "OSRM API error: %s - %s", exc.response.status_code, exc.response.reason_phrase
            )
            raise RoutingUnavailable(f"OSRM API error: {exc.response.status_code}") from exc
        except (httpx.HTTPError, OSError) as exc:
            logger.warning("OSRM API error: %s", exc)
            raise RoutingUnavailable(f"Failed to connect to OSRM service at {self.base_url}: {exc}") from exc
        except ValueError as exc:
            raise RoutingUnavailable("OSRM response is not valid JSON") from exc
        finally:
            client.close()

        if not isinstance(data, dict):
            raise RoutingUnavailable("OSRM response is not a JSON object")

        code = data.get("code")
        if code in ("NoRoute", "NoSegment"):
            logger.info("OSRM found no route: %s", data.get("message", code))
            return None
        if code != "Ok":
            error_msg = data.get("message", "Unknown OSRM route error")
            raise RoutingUnavailable(f"OSRM route request failed: {error_msg}")

        routes = data.get("routes") or []
        if not routes:
            return None
        try:
            distance = float(routes[0]["distance"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RoutingUnavailable("OSRM route is missing a distance") from exc
        if distance < 0:
            raise RoutingUnavailable(f"OSRM returned a negative distance: {distance}")
        return distance


def check_health(base_url: str | None = None, transport: Optional[httpx.BaseTransport] = None) -> bool:
    """Check OSRM service health by routing between two nearby points.

    Public OSRM endpoints may not have a /health endpoint, so we test
    connectivity with a minimal route request.
    """
    base = base_url or settings.osrm_base_url
    if not base:
        return False
    try:
        # Two points in downtown Toronto
        client = OSRMClient(base_url=base, transport=transport)
        return client.route_distance((43.6487, -79.3817), (43.6426, -79.3871)) is not None
    except RoutingUnavailable:
        return False
