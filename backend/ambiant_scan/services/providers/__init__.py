"""Upstream provider clients and their contracts."""

from .base import (
    EnvironmentalProvider,
    ForwardGeocodeProvider,
    HTTPProvider,
    IPGeolocationProvider,
    ReverseGeocodeProvider,
)
from .bigdatacloud import BigDataCloudReverseGeocoder
from .ip_api import IpApiGeolocationProvider
from .open_meteo import (
    OpenMeteoAirQualityProvider,
    OpenMeteoGeocoder,
    OpenMeteoWeatherProvider,
)

__all__ = [
    # Contracts
    "EnvironmentalProvider",
    "ForwardGeocodeProvider",
    "HTTPProvider",
    "IPGeolocationProvider",
    "ReverseGeocodeProvider",
    # Implementations
    "BigDataCloudReverseGeocoder",
    "IpApiGeolocationProvider",
    "OpenMeteoAirQualityProvider",
    "OpenMeteoGeocoder",
    "OpenMeteoWeatherProvider",
]
