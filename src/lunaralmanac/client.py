"""ipgeolocation.io astronomy API client: fetch, check status, normalize."""

import logging
import os
from datetime import date

import httpx

from lunaralmanac.models import NormalizedAstronomyRecord
from lunaralmanac.normalize import MalformedCoordinate, normalize_astronomy

logger = logging.getLogger(__name__)

_BASE_URL = "https://api.ipgeolocation.io/v2/astronomy"
_TIMEOUT = 10.0
_API_KEY_ENV = "IPGEOLOCATION_API_KEY"


class AstronomyFetchError(Exception):
    """Astronomy data could not be fetched or normalized. Safe to retry."""


class AstronomyClient:
    """Thin wrapper over the astronomy endpoint. No caching, no retries."""

    def __init__(
        self,
        api_key: str,
        base_url: str = _BASE_URL,
        timeout: float = _TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_env(cls, **kwargs) -> "AstronomyClient":
        """Build a client from IPGEOLOCATION_API_KEY (empty if unset; fetches then fail)."""
        return cls(os.environ.get(_API_KEY_ENV, ""), **kwargs)

    def by_ip(
        self, ip: str | None = None, when: date | None = None
    ) -> NormalizedAstronomyRecord:
        """Astronomy data for the caller's IP (or ``ip``), located by the API."""
        params: dict[str, str] = {}
        if ip:
            params["ip"] = ip
        return self._fetch(params, when, "IP")

    def by_coordinates(
        self, lat: float, lng: float, when: date | None = None
    ) -> NormalizedAstronomyRecord:
        params = {"lat": str(lat), "long": str(lng)}
        return self._fetch(params, when, "coordinates")

    def by_location(
        self, location: str, when: date | None = None
    ) -> NormalizedAstronomyRecord:
        """Astronomy data for a free-text location name ("Seoul, South Korea")."""
        return self._fetch({"location": location}, when, "location")

    def _fetch(
        self, params: dict[str, str], when: date | None, lookup: str
    ) -> NormalizedAstronomyRecord:
        """Single API call. Raises AstronomyFetchError on any failure."""
        if not self.api_key:
            raise AstronomyFetchError(
                f"Failed to fetch astronomy data by {lookup}: {_API_KEY_ENV} is not set"
            )
        query = {"apiKey": self.api_key, **params}
        if when is not None:
            query["date"] = when.isoformat()

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as http:
                resp = http.get(self.base_url, params=query)
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise AstronomyFetchError(
                f"Failed to fetch astronomy data by {lookup}: "
                f"HTTP error! status: {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise AstronomyFetchError(
                f"Failed to fetch astronomy data by {lookup}: {exc}"
            ) from exc
        except ValueError as exc:
            raise AstronomyFetchError(
                f"Failed to fetch astronomy data by {lookup}: invalid JSON body"
            ) from exc

        if not isinstance(payload, dict):
            raise AstronomyFetchError(
                f"Failed to fetch astronomy data by {lookup}: unexpected body"
            )
        try:
            return normalize_astronomy(payload)
        except MalformedCoordinate as exc:
            raise AstronomyFetchError(
                f"Failed to fetch astronomy data by {lookup}: {exc}"
            ) from exc


def coordinates_from_position(position: dict | None) -> tuple[float, float] | None:
    """Extract (lat, lng) from a browser Geolocation API position.

    Returns None while the browser has not answered, when the user denied
    access (``{"error": ...}``), or when the coordinates are not numbers.
    """
    if not isinstance(position, dict):
        return None
    coords = position.get("coords")
    if not isinstance(coords, dict):
        return None
    lat = coords.get("latitude")
    lng = coords.get("longitude")
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in (lat, lng)):
        return None
    return float(lat), float(lng)


def fetch_with_fallback(
    client: AstronomyClient,
    lat: float | None = None,
    lng: float | None = None,
) -> NormalizedAstronomyRecord:
    """Fetch by coordinates when known, falling back to IP lookup.

    Args:
        client: Configured AstronomyClient.
        lat: Browser-reported latitude, or None.
        lng: Browser-reported longitude, or None.

    Returns:
        NormalizedAstronomyRecord for the best available location.

    Raises:
        AstronomyFetchError: When the IP lookup fails too.
    """
    if lat is not None and lng is not None:
        try:
            return client.by_coordinates(lat, lng)
        except AstronomyFetchError as exc:
            logger.warning("Coordinate lookup failed, falling back to IP: %s", exc)
    return client.by_ip()
