"""Core data models for Ambiant Scan.

Location, GeoIP and cache-statistics records exchanged between the cache
layer, the services and the HTTP routes. Wire names (camelCase) are kept as
aliases so responses stay compatible with existing clients; Python code uses
the snake_case field names.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    """Machine-readable failure categories."""

    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    ALL_SOURCES_UNAVAILABLE = "ALL_SOURCES_UNAVAILABLE"
    LOOKUP_FAILED = "LOOKUP_FAILED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class LocationRecord(BaseModel):
    """Canonical location produced by the location resolver.

    Latitude and longitude always sit on the 0.01 degree cache grid.
    Immutable: the same instance is handed out from the cache to every
    request.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str = Field(..., description="City, locality or fallback label")
    region: str = Field(default="", description="First-level subdivision")
    country: str = Field(default="", description="Country name")
    country_code: str = Field(default="", alias="countryCode")
    lat: float = Field(..., ge=-90, le=90, description="Grid latitude")
    lon: float = Field(..., ge=-180, le=180, description="Grid longitude")


class IPLocationRecord(BaseModel):
    """Geolocation of a public IP address."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ip: str
    lat: float | None = None
    lon: float | None = None
    city: str = "Unknown"
    region: str = ""
    region_code: str = Field(default="", alias="regionCode")
    country: str = ""
    country_code: str = Field(default="", alias="countryCode")
    zip: str = ""
    timezone: str = ""
    isp: str = ""
    org: str = ""
    as_: str = Field(default="", alias="as")


class CacheStats(BaseModel):
    """Point-in-time counters of one cache store."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    entries: int = Field(..., ge=0)
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    evictions: int = Field(..., ge=0)
    hit_rate: str = Field(..., alias="hitRate", description="e.g. '87.5%' or 'N/A'")
    ttl_seconds: int | float = Field(..., alias="ttlSeconds")
    max_entries: int = Field(..., alias="maxEntries")
