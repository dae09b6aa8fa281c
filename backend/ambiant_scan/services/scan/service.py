"""Scan orchestrator: cached or freshly fetched environmental snapshots.

Pipeline for one scan:
1. Look the grid key up in the environmental-data cache
2. On a miss, fetch weather and air quality in parallel
3. Degrade per source: a failed fetch or a malformed payload becomes "no
   data" for that source
4. Fail only when every source failed
5. Normalize, cache the master copy, return a copy

Concurrent misses on the same key are not coalesced; each may reach the
upstream providers.
"""

import asyncio
import logging
import time
from typing import Optional

from pydantic import BaseModel

from ambiant_scan.exceptions import AllSourcesUnavailable
from ambiant_scan.models import (
    AirQualityResponse,
    EnvironmentalSnapshot,
    LocationRecord,
    WeatherResponse,
)
from ambiant_scan.services.cache import CacheRegistry
from ambiant_scan.services.providers import EnvironmentalProvider
from ambiant_scan.services.scan.normalizer import model_environmental_data
from ambiant_scan.utils.cache import TTLCache

logger = logging.getLogger(__name__)


class ScanOrchestratorService:
    """Serves environmental snapshots keyed by grid coordinates."""

    def __init__(
        self,
        weather_provider: EnvironmentalProvider,
        air_quality_provider: EnvironmentalProvider,
        data_cache: TTLCache[str, EnvironmentalSnapshot],
    ) -> None:
        self._weather = weather_provider
        self._air_quality = air_quality_provider
        self._cache = data_cache

    async def _fetch_or_none(
        self,
        provider: EnvironmentalProvider,
        schema: type[BaseModel],
        lat: float,
        lon: float,
    ) -> Optional[dict]:
        """Fetch and validate one source, turning any failure into None.

        A payload that decodes but does not match ``schema`` counts as a
        failure of that source only.
        """
        try:
            data = await provider.fetch(lat, lon)
            return schema.model_validate(data).model_dump()
        except Exception as e:
            logger.warning(f"[SCAN] {provider.name} fetch error: {e}")
            return None

    async def perform_scan(
        self, lat: float, lon: float, location: LocationRecord
    ) -> EnvironmentalSnapshot:
        """Return the snapshot for grid point (lat, lon).

        ``lat``/``lon`` are expected to be on the grid already; ``location``
        is only used as output metadata on a miss.

        Raises:
            AllSourcesUnavailable: Both providers failed.
        """
        key = CacheRegistry.build_coords_key(lat, lon)
        cached = self._cache.get(key)
        if cached is not None:
            logger.info(f"[SCAN] Cache HIT for {key}")
            return cached.annotate(cached=True)

        logger.info(f"[SCAN] Cache MISS for {key}, fetching weather + air quality")
        start = time.perf_counter()
        weather, air_quality = await asyncio.gather(
            self._fetch_or_none(self._weather, WeatherResponse, lat, lon),
            self._fetch_or_none(self._air_quality, AirQualityResponse, lat, lon),
        )
        elapsed = time.perf_counter() - start

        if weather is None and air_quality is None:
            logger.error(f"[SCAN] All sources failed for {key} ({elapsed*1000:.0f}ms)")
            raise AllSourcesUnavailable()

        snapshot = model_environmental_data(location, weather, air_quality)
        self._cache.set(key, snapshot)
        logger.info(
            f"[SCAN] Fetched {key} in {elapsed*1000:.0f}ms "
            f"(weather={'ok' if weather is not None else 'missing'}, "
            f"air_quality={'ok' if air_quality is not None else 'missing'})"
        )
        return snapshot.annotate(cached=False)
