"""HTTP client for the Nominatim (OpenStreetMap) geocoding service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from ...config import settings
from ...errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeocodeMatch:
    latitude: float
    longitude: float
    display_name: str


class GeocodingProvider(Protocol):
    def search(self, query: str) -> GeocodeMatch | None:
        """Return the best match for ``query`` or None when nothing matched."""
        ...


class NominatimClient:
    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        email: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.email = email if email is not None else settings.nominatim_email
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def search(self, query: str) -> GeocodeMatch | None:
        """Look up ``query`` and return the single best match.

        Raises:
            ProviderError: on timeouts, HTTP errors or a payload that is not a
                Nominatim result list.
        """
        params: dict[str, Any] = {
            "q": query,
            "format": "json",
            "limit": 1,
            "addressdetails": 1,
        }
        if self.email:
            params["email"] = self.email

        client = self._get_client()
        try:
            response = client.get(f"{self.base_url}/search", params=params)
            response.raise_for_status()
            results = response.json()
        except httpx.TimeoutException as exc:
            raise ProviderError(f"Geocoding request timed out for '{query}'") from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"Geocoding API error: {exc.response.status_code} - {exc.response.reason_phrase}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderError(f"Geocoding failed: {exc}") from exc
        finally:
            client.close()

        if not isinstance(results, list):
            raise ProviderError("Invalid geocoding response")
        if not results:
            return None

        first = results[0]
        try:
            return GeocodeMatch(
                latitude=float(first.get("lat")),
                longitude=float(first.get("lon")),
                display_name=str(first.get("display_name") or ""),
            )
        except (TypeError, ValueError, AttributeError) as exc:
            raise ProviderError("Invalid geocoding response") from exc
