"""Ambiant Scan Services.

Service layer components:
- Cache: four in-memory TTL/LRU stores grouped in a registry
- Providers: BigDataCloud, Open-Meteo and ip-api clients behind abstract contracts
- Location: reverse geocoding (degrades to a placeholder) and forward geocoding
- Scan: parallel weather + air-quality fetch, normalization and caching
- GeoIP: client IP geolocation
"""

from .cache import CacheRegistry
from .geoip import IPLocatorService
from .location import LocationResolverService, ReverseGeocodeResult
from .providers import (
    BigDataCloudReverseGeocoder,
    EnvironmentalProvider,
    ForwardGeocodeProvider,
    IPGeolocationProvider,
    IpApiGeolocationProvider,
    OpenMeteoAirQualityProvider,
    OpenMeteoGeocoder,
    OpenMeteoWeatherProvider,
    ReverseGeocodeProvider,
)
from .scan import ScanOrchestratorService

__all__ = [
    # Cache
    "CacheRegistry",
    # Providers
    "BigDataCloudReverseGeocoder",
    "EnvironmentalProvider",
    "ForwardGeocodeProvider",
    "IPGeolocationProvider",
    "IpApiGeolocationProvider",
    "OpenMeteoAirQualityProvider",
    "OpenMeteoGeocoder",
    "OpenMeteoWeatherProvider",
    "ReverseGeocodeProvider",
    # Core services
    "IPLocatorService",
    "LocationResolverService",
    "ReverseGeocodeResult",
    "ScanOrchestratorService",
]
