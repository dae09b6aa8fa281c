"""Upstream provider contracts and the shared httpx plumbing.

Each collaborator the core depends on is an abstract class here. The
concrete implementations talk to free, keyless public APIs; tests swap in
in-process fakes.

Every request carries an explicit timeout. Transport errors, timeouts,
non-2xx responses and undecodable bodies all surface as
:class:`UpstreamUnavailable` so callers only need to handle one type.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ambiant_scan import __version__
from ambiant_scan.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0


class HTTPProvider:
    """Base for providers backed by a shared, lazily created httpx client."""

    name = "upstream"

    HEADERS = {
        "User-Agent": f"AmbiantScan/{__version__}",
        "Accept": "application/json",
    }

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self.HEADERS,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> dict:
        """GET ``url`` and decode the JSON object body.

        Raises:
            UpstreamUnavailable: On any transport, status or decode failure,
                or when the body is not a JSON object.
        """
        client = self._get_client()
        try:
            response = await client.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException:
            raise UpstreamUnavailable(self.name, f"Timeout after {self._timeout:g}s") from None
        except httpx.HTTPStatusError as e:
            body = e.response.text[:200]
            raise UpstreamUnavailable(
                self.name, f"HTTP {e.response.status_code}: {body}"
            ) from None
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(self.name, f"{type(e).__name__}: {e}") from None
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            raise UpstreamUnavailable(self.name, f"JSON parse error: {e}") from None
        if not isinstance(data, dict):
            raise UpstreamUnavailable(self.name, f"Unexpected payload: {type(data).__name__}")
        return data


class ReverseGeocodeProvider(ABC):
    """Coordinates -> place names."""

    @abstractmethod
    async def reverse(self, lat: float, lon: float) -> dict:
        """Return ``{city?, locality?, principalSubdivision?, countryName?, countryCode?}``."""
        pass


class ForwardGeocodeProvider(ABC):
    """Place name -> candidate matches."""

    @abstractmethod
    async def search(self, name: str) -> dict:
        """Return ``{results: [{name, admin1?, country?, country_code?, latitude, longitude}]}``.

        An empty or missing ``results`` list means "not found", not an error.
        """
        pass


class EnvironmentalProvider(ABC):
    """Coordinates -> current (and daily) readings."""

    name = "environmental"

    @abstractmethod
    async def fetch(self, lat: float, lon: float) -> dict:
        """Return a ``{current, current_units, daily?, ...}`` record."""
        pass


class IPGeolocationProvider(ABC):
    """IP address -> geolocation."""

    @abstractmethod
    async def lookup(self, ip: str) -> dict:
        """Return ``{status, message?, query, lat, lon, city, ...}``."""
        pass
