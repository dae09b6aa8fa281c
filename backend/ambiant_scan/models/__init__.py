"""Data models for Ambiant Scan."""

from .core import CacheStats, ErrorCode, IPLocationRecord, LocationRecord
from .snapshot import (
    AirQuality,
    Atmosphere,
    Conditions,
    EnvironmentalSnapshot,
    GridCoordinates,
    Humidity,
    Measurement,
    Pollutants,
    Precipitation,
    SnapshotLocation,
    SnapshotMeta,
    Sun,
    Temperature,
    UVIndex,
    Wind,
)
from .upstream import AirQualityResponse, WeatherResponse

__all__ = [
    # Core records
    "CacheStats",
    "ErrorCode",
    "IPLocationRecord",
    "LocationRecord",
    # Environmental snapshot
    "AirQuality",
    "Atmosphere",
    "Conditions",
    "EnvironmentalSnapshot",
    "GridCoordinates",
    "Humidity",
    "Measurement",
    "Pollutants",
    "Precipitation",
    "SnapshotLocation",
    "SnapshotMeta",
    "Sun",
    "Temperature",
    "UVIndex",
    "Wind",
    # Raw upstream payloads
    "AirQualityResponse",
    "WeatherResponse",
]
