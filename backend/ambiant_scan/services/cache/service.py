"""Cache registry.

Groups the four independent in-memory stores used by the proxy and the key
builders for each key domain:

- ``geo-reverse``: grid coordinates -> LocationRecord
- ``city-forward``: folded city name -> LocationRecord
- ``environmental-data``: grid coordinates -> EnvironmentalSnapshot
- ``geoip``: raw IP string -> IPLocationRecord

The registry is built once at application startup and handed to every
service that needs a store.
"""

import logging
import time
from typing import Callable

from ambiant_scan.config import Settings
from ambiant_scan.models import (
    CacheStats,
    EnvironmentalSnapshot,
    IPLocationRecord,
    LocationRecord,
)
from ambiant_scan.utils.cache import TTLCache
from ambiant_scan.utils.geo import coords_key

logger = logging.getLogger(__name__)


class CacheRegistry:
    """Owns the reverse-geocode, forward-geocode, data and GeoIP stores."""

    def __init__(
        self,
        data_ttl_seconds: float = 600,
        geo_ttl_seconds: float = 86400,
        max_entries: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.reverse_geocode: TTLCache[str, LocationRecord] = TTLCache(
            "geo-reverse", geo_ttl_seconds, max_entries, clock
        )
        self.forward_geocode: TTLCache[str, LocationRecord] = TTLCache(
            "city-forward", geo_ttl_seconds, max_entries, clock
        )
        self.environmental_data: TTLCache[str, EnvironmentalSnapshot] = TTLCache(
            "environmental-data", data_ttl_seconds, max_entries, clock
        )
        self.geoip: TTLCache[str, IPLocationRecord] = TTLCache(
            "geoip", geo_ttl_seconds, max_entries, clock
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheRegistry":
        return cls(
            data_ttl_seconds=settings.cache_ttl_seconds,
            geo_ttl_seconds=settings.geo_cache_ttl_seconds,
            max_entries=settings.max_cache_entries,
        )

    @property
    def stores(self) -> list[TTLCache]:
        """All stores in reporting order."""
        return [
            self.reverse_geocode,
            self.forward_geocode,
            self.environmental_data,
            self.geoip,
        ]

    def stats(self) -> list[CacheStats]:
        return [store.stats() for store in self.stores]

    def flush_all(self) -> int:
        """Flush every store.

        Returns:
            Total number of entries removed across all stores.
        """
        flushed = sum(store.flush() for store in self.stores)
        logger.info(f"[CACHE] Flushed {flushed} entries from {len(self.stores)} stores")
        return flushed

    @staticmethod
    def build_coords_key(lat: float, lon: float) -> str:
        """Key for the reverse-geocode and environmental-data stores.

        Example:
            >>> CacheRegistry.build_coords_key(45.5017, -73.5673)
            '45.5,-73.57'
        """
        return coords_key(lat, lon)

    @staticmethod
    def build_city_key(city_name: str) -> str:
        """Key for the forward-geocode store: trimmed and lowercased.

        Example:
            >>> CacheRegistry.build_city_key("  Montreal ")
            'montreal'
        """
        return city_name.lower().strip()
