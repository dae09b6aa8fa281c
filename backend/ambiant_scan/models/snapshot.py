"""Environmental snapshot models.

A snapshot merges one weather response and one air-quality response into a
single normalized record. Either source may be missing, in which case its
fields hold ``None`` (or an ``"unknown"`` label) instead of failing.

All models are frozen. The cached master copy is never touched: request
specific annotations (``cached``, ``response_time_ms``) go on a copy made by
:meth:`EnvironmentalSnapshot.annotate`.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Upstream numbers are kept as-is (an AQI of 42 stays an int on the wire).
Reading = Optional[Union[int, float]]

DEFAULT_POLLUTANT_UNIT = "μg/m³"


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class GridCoordinates(_Section):
    lat: float
    lon: float


class SnapshotLocation(_Section):
    city: str
    region: str
    country: str
    country_code: str = Field(..., alias="countryCode")
    coordinates: GridCoordinates


class SnapshotMeta(_Section):
    source: str
    version: str
    timestamp: str = Field(..., description="ISO-8601 UTC time the snapshot was built")
    location: SnapshotLocation
    timezone: Optional[str] = None
    elevation_m: Reading = None
    cached: bool = Field(default=False, alias="_cached")
    response_time_ms: Optional[int] = Field(default=None, alias="_responseTime_ms")


class Temperature(_Section):
    current_c: Reading = None
    feels_like_c: Reading = None
    daily_high_c: Reading = None
    daily_low_c: Reading = None
    unit: str = "°C"


class Measurement(_Section):
    value: Reading = None
    unit: str = DEFAULT_POLLUTANT_UNIT


class Pollutants(_Section):
    pm2_5: Measurement = Measurement()
    pm10: Measurement = Measurement()
    nitrogen_dioxide: Measurement = Measurement()
    ozone: Measurement = Measurement()
    sulphur_dioxide: Measurement = Measurement()
    carbon_monoxide: Measurement = Measurement()
    dust: Measurement = Measurement()


class AirQuality(_Section):
    us_aqi: Reading = None
    level: str = "unknown"
    concern: str = "No data available"
    pollutants: Pollutants = Pollutants()


class UVIndex(_Section):
    current: Reading = None
    clear_sky: Reading = None
    daily_max: Reading = None
    level: str = "unknown"
    concern: str = "No data available"


class Humidity(_Section):
    relative_percent: Reading = None


class Wind(_Section):
    speed_kmh: Reading = None
    gusts_kmh: Reading = None
    direction_degrees: Reading = None
    direction_label: str = "unknown"
    description: str = "unknown"
    daily_max_kmh: Reading = None


class Atmosphere(_Section):
    pressure_msl_hpa: Reading = None
    surface_pressure_hpa: Reading = None
    cloud_cover_percent: Reading = None


class Precipitation(_Section):
    current_mm: Reading = None
    rain_mm: Reading = None
    daily_sum_mm: Reading = None
    daily_probability_percent: Reading = None


class Conditions(_Section):
    weather_code: Optional[int] = None
    description: str = "Unknown"
    is_day: bool = False


class Sun(_Section):
    sunrise: Optional[str] = None
    sunset: Optional[str] = None


class EnvironmentalSnapshot(_Section):
    """Normalized environmental conditions at one grid point."""

    meta: SnapshotMeta
    temperature: Temperature
    air_quality: AirQuality
    uv_index: UVIndex
    humidity: Humidity
    wind: Wind
    atmosphere: Atmosphere
    precipitation: Precipitation
    conditions: Conditions
    sun: Sun

    def annotate(self, **meta_changes) -> "EnvironmentalSnapshot":
        """Return a copy whose ``meta`` carries the given field changes.

        Only ``meta`` is replaced; the other sections are frozen and shared
        with the original.

        Example:
            >>> view = snapshot.annotate(cached=True)
        """
        meta = self.meta.model_copy(update=meta_changes)
        return self.model_copy(update={"meta": meta})

    def to_response(self) -> dict:
        """JSON-ready dict using the wire (alias) names."""
        return self.model_dump(mode="json", by_alias=True)
