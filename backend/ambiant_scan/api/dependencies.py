"""Service wiring for the HTTP layer.

A single :class:`ServiceContainer` is built in the application lifespan and
kept on ``app.state``. Routes receive it through :func:`get_services`.
"""

import logging
from dataclasses import dataclass, field

from fastapi import Request

from ambiant_scan.config import Settings
from ambiant_scan.services import (
    BigDataCloudReverseGeocoder,
    CacheRegistry,
    IPLocatorService,
    IpApiGeolocationProvider,
    LocationResolverService,
    OpenMeteoAirQualityProvider,
    OpenMeteoGeocoder,
    OpenMeteoWeatherProvider,
    ScanOrchestratorService,
)
from ambiant_scan.services.providers import HTTPProvider

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything a request handler needs, built once per process."""

    settings: Settings
    caches: CacheRegistry
    locations: LocationResolverService
    scans: ScanOrchestratorService
    geoip: IPLocatorService
    providers: list = field(default_factory=list)

    @classmethod
    def build(cls, settings: Settings) -> "ServiceContainer":
        caches = CacheRegistry.from_settings(settings)
        timeout = settings.upstream_timeout_seconds

        reverse = BigDataCloudReverseGeocoder(timeout=timeout)
        forward = OpenMeteoGeocoder(timeout=timeout)
        weather = OpenMeteoWeatherProvider(timeout=timeout)
        air_quality = OpenMeteoAirQualityProvider(timeout=timeout)
        ip_api = IpApiGeolocationProvider(timeout=settings.geoip_timeout_seconds)

        return cls(
            settings=settings,
            caches=caches,
            locations=LocationResolverService(
                reverse, forward, caches.reverse_geocode, caches.forward_geocode
            ),
            scans=ScanOrchestratorService(weather, air_quality, caches.environmental_data),
            geoip=IPLocatorService(ip_api, caches.geoip),
            providers=[reverse, forward, weather, air_quality, ip_api],
        )

    async def close(self) -> None:
        """Close the shared HTTP clients of every provider."""
        for provider in self.providers:
            if isinstance(provider, HTTPProvider):
                await provider.close()


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services
