"""Location resolver: coordinates or city name -> canonical LocationRecord.

Two cache-backed operations that share no state:

1. Reverse geocoding never fails. When the provider is down the caller gets
   a coordinate-labelled placeholder, flagged ``degraded`` and NOT cached, so
   the next request retries the provider.
2. Forward geocoding surfaces its failures: an unknown city raises
   :class:`NotFound`, a broken provider raises :class:`UpstreamUnavailable`.

Both snap coordinates to the 0.01 degree grid so downstream cache keys line
up regardless of how the location was found.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ambiant_scan.exceptions import NotFound, UpstreamUnavailable
from ambiant_scan.models import LocationRecord
from ambiant_scan.services.cache import CacheRegistry
from ambiant_scan.services.providers import ForwardGeocodeProvider, ReverseGeocodeProvider
from ambiant_scan.utils.cache import TTLCache
from ambiant_scan.utils.geo import format_coord, round_coords, round_half_away_from_zero

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReverseGeocodeResult:
    """Outcome of a reverse geocode.

    ``degraded`` is True when ``location`` is a placeholder built because the
    provider failed; ``error`` then holds the provider's message.
    """

    location: LocationRecord
    degraded: bool = False
    error: Optional[str] = None


def placeholder_location(lat: float, lon: float) -> LocationRecord:
    """Coordinate-labelled location used when reverse geocoding fails."""
    r_lat, r_lon = round_coords(lat, lon)
    return LocationRecord(
        city=f"Location ({format_coord(r_lat)}, {format_coord(r_lon)})",
        lat=r_lat,
        lon=r_lon,
    )


class LocationResolverService:
    """Resolves coordinates and city names through the geocoding caches."""

    def __init__(
        self,
        reverse_provider: ReverseGeocodeProvider,
        forward_provider: ForwardGeocodeProvider,
        reverse_cache: TTLCache[str, LocationRecord],
        forward_cache: TTLCache[str, LocationRecord],
    ) -> None:
        self._reverse_provider = reverse_provider
        self._forward_provider = forward_provider
        self._reverse_cache = reverse_cache
        self._forward_cache = forward_cache

    async def reverse_geocode(self, lat: float, lon: float) -> ReverseGeocodeResult:
        """Coordinates -> location, degrading to a placeholder on failure."""
        key = CacheRegistry.build_coords_key(lat, lon)
        cached = self._reverse_cache.get(key)
        if cached is not None:
            return ReverseGeocodeResult(location=cached)

        r_lat, r_lon = round_coords(lat, lon)
        try:
            data = await self._reverse_provider.reverse(r_lat, r_lon)
            location = LocationRecord(
                city=(
                    data.get("city")
                    or data.get("locality")
                    or data.get("principalSubdivision")
                    or "Unknown"
                ),
                region=data.get("principalSubdivision") or "",
                country=data.get("countryName") or "",
                country_code=data.get("countryCode") or "",
                lat=r_lat,
                lon=r_lon,
            )
        except Exception as e:
            logger.warning(f"[GEOCODE] Reverse geocode failed for {key}, using placeholder: {e}")
            return ReverseGeocodeResult(
                location=placeholder_location(lat, lon),
                degraded=True,
                error=str(e),
            )

        self._reverse_cache.set(key, location)
        logger.info(f"[GEOCODE] Resolved {key} -> {location.city}")
        return ReverseGeocodeResult(location=location)

    async def forward_geocode(self, city_name: str) -> LocationRecord:
        """City name -> location of the best match.

        Raises:
            NotFound: The provider returned no match.
            UpstreamUnavailable: The provider could not be reached or parsed.
        """
        key = CacheRegistry.build_city_key(city_name)
        cached = self._forward_cache.get(key)
        if cached is not None:
            return cached

        data = await self._forward_provider.search(city_name)
        if not isinstance(data, dict):
            raise UpstreamUnavailable(
                "forward-geocode", f"Unexpected payload: {type(data).__name__}"
            )
        results = data.get("results") or []
        if not isinstance(results, list):
            raise UpstreamUnavailable(
                "forward-geocode", f"Unexpected results: {type(results).__name__}"
            )
        if not results:
            raise NotFound(f'City not found: "{city_name}"')

        best = results[0]
        try:
            location = LocationRecord(
                city=best["name"],
                region=best.get("admin1") or "",
                country=best.get("country") or "",
                country_code=best.get("country_code") or "",
                lat=round_half_away_from_zero(best["latitude"]),
                lon=round_half_away_from_zero(best["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailable("forward-geocode", f"Malformed match: {e}") from None
        self._forward_cache.set(key, location)
        logger.info(
            f"[GEOCODE] City '{city_name}' -> {location.city}, {location.country} "
            f"({location.lat}, {location.lon})"
        )
        return location
