"""Normalization of raw Open-Meteo responses into an EnvironmentalSnapshot.

Pure lookup/threshold functions. The breakpoints below are part of the
public output format and must not drift:

- AQI bands follow the US EPA scale (inclusive upper bounds).
- UV bands follow the WHO UV index scale (inclusive upper bounds).
- Wind-speed categories use exclusive km/h upper bounds.
- Compass labels use 16 points of 22.5 degrees, ties rounding up.
"""

import math
from typing import Any, Optional

from ambiant_scan import SERVICE_NAME, __version__
from ambiant_scan.models import (
    AirQuality,
    Atmosphere,
    Conditions,
    EnvironmentalSnapshot,
    GridCoordinates,
    Humidity,
    LocationRecord,
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
from ambiant_scan.models.snapshot import DEFAULT_POLLUTANT_UNIT
from ambiant_scan.utils.timestamps import iso_now

# WMO weather interpretation codes
WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

NO_DATA = {"level": "unknown", "concern": "No data available"}

# (inclusive upper bound, level, concern); values above the last bound fall
# through to the final tuple's level.
AQI_BANDS = [
    (50, "good", "Air quality is satisfactory"),
    (100, "moderate", "Acceptable; moderate concern for sensitive individuals"),
    (150, "unhealthy_sensitive", "Sensitive groups may experience health effects"),
    (200, "unhealthy", "Everyone may begin to experience health effects"),
    (300, "very_unhealthy", "Health alert: everyone may experience serious effects"),
]
AQI_ABOVE = ("hazardous", "Health warning of emergency conditions")

UV_BANDS = [
    (2, "low", "No protection needed"),
    (5, "moderate", "Seek shade during midday"),
    (7, "high", "Reduce sun exposure between 10am-4pm"),
    (10, "very_high", "Extra protection needed; avoid being outside during midday"),
]
UV_ABOVE = ("extreme", "Take all precautions; unprotected skin can burn in minutes")

# (exclusive upper bound in km/h, description)
WIND_SPEED_BANDS = [
    (1, "calm"),
    (6, "light air"),
    (12, "light breeze"),
    (20, "gentle breeze"),
    (29, "moderate breeze"),
    (39, "fresh breeze"),
    (50, "strong breeze"),
    (62, "high wind"),
    (75, "gale"),
    (89, "strong gale"),
    (103, "storm"),
    (118, "violent storm"),
]
WIND_SPEED_ABOVE = "hurricane"

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


def _banded(value: Optional[float], bands: list, above: tuple) -> dict:
    if value is None:
        return dict(NO_DATA)
    for upper, level, concern in bands:
        if value <= upper:
            return {"level": level, "concern": concern}
    level, concern = above
    return {"level": level, "concern": concern}


def aqi_level(aqi: Optional[float]) -> dict:
    """US AQI -> ``{level, concern}``."""
    return _banded(aqi, AQI_BANDS, AQI_ABOVE)


def uv_level(uvi: Optional[float]) -> dict:
    """UV index -> ``{level, concern}``."""
    return _banded(uvi, UV_BANDS, UV_ABOVE)


def wind_description(speed_kmh: Optional[float]) -> str:
    if speed_kmh is None:
        return "unknown"
    for upper, description in WIND_SPEED_BANDS:
        if speed_kmh < upper:
            return description
    return WIND_SPEED_ABOVE


def wind_direction_label(degrees: Optional[float]) -> str:
    if degrees is None:
        return "unknown"
    return COMPASS_POINTS[math.floor(degrees / 22.5 + 0.5) % 16]


def weather_description(code: Optional[int]) -> str:
    return WEATHER_CODES.get(code, "Unknown")


def _first(values: Any) -> Any:
    """First element of a daily series, or None when absent/empty."""
    if isinstance(values, list) and values:
        return values[0]
    return None


def _section(payload: Optional[dict], name: str) -> dict:
    if not payload:
        return {}
    return payload.get(name) or {}


def model_environmental_data(
    location: LocationRecord,
    weather: Optional[dict],
    air_quality: Optional[dict],
) -> EnvironmentalSnapshot:
    """Merge whichever raw responses are present into one snapshot.

    A missing source leaves its fields at their "no data" defaults.
    """
    w = _section(weather, "current")
    w_units = _section(weather, "current_units")
    d = _section(weather, "daily")
    aq = _section(air_quality, "current")
    aq_units = _section(air_quality, "current_units")

    uv_current = aq.get("uv_index")
    uv_daily_max = _first(d.get("uv_index_max"))

    def pollutant(field: str) -> Measurement:
        return Measurement(
            value=aq.get(field),
            unit=aq_units.get(field) or DEFAULT_POLLUTANT_UNIT,
        )

    meta = SnapshotMeta(
        source=SERVICE_NAME,
        version=__version__,
        timestamp=iso_now(),
        location=SnapshotLocation(
            city=location.city,
            region=location.region,
            country=location.country,
            country_code=location.country_code,
            coordinates=GridCoordinates(lat=location.lat, lon=location.lon),
        ),
        # Falsy upstream values (empty string, elevation 0) are reported as null.
        timezone=(weather or {}).get("timezone") or None,
        elevation_m=(weather or {}).get("elevation") or None,
    )

    return EnvironmentalSnapshot(
        meta=meta,
        temperature=Temperature(
            current_c=w.get("temperature_2m"),
            feels_like_c=w.get("apparent_temperature"),
            daily_high_c=_first(d.get("temperature_2m_max")),
            daily_low_c=_first(d.get("temperature_2m_min")),
            unit=w_units.get("temperature_2m") or "°C",
        ),
        air_quality=AirQuality(
            us_aqi=aq.get("us_aqi"),
            **aqi_level(aq.get("us_aqi")),
            pollutants=Pollutants(
                pm2_5=pollutant("pm2_5"),
                pm10=pollutant("pm10"),
                nitrogen_dioxide=pollutant("nitrogen_dioxide"),
                ozone=pollutant("ozone"),
                sulphur_dioxide=pollutant("sulphur_dioxide"),
                carbon_monoxide=pollutant("carbon_monoxide"),
                dust=pollutant("dust"),
            ),
        ),
        uv_index=UVIndex(
            current=uv_current,
            clear_sky=aq.get("uv_index_clear_sky"),
            daily_max=uv_daily_max if uv_daily_max is not None else uv_current,
            **uv_level(uv_current),
        ),
        humidity=Humidity(relative_percent=w.get("relative_humidity_2m")),
        wind=Wind(
            speed_kmh=w.get("wind_speed_10m"),
            gusts_kmh=w.get("wind_gusts_10m"),
            direction_degrees=w.get("wind_direction_10m"),
            direction_label=wind_direction_label(w.get("wind_direction_10m")),
            description=wind_description(w.get("wind_speed_10m")),
            daily_max_kmh=_first(d.get("wind_speed_10m_max")),
        ),
        atmosphere=Atmosphere(
            pressure_msl_hpa=w.get("pressure_msl"),
            surface_pressure_hpa=w.get("surface_pressure"),
            cloud_cover_percent=w.get("cloud_cover"),
        ),
        precipitation=Precipitation(
            current_mm=w.get("precipitation"),
            rain_mm=w.get("rain"),
            daily_sum_mm=_first(d.get("precipitation_sum")),
            daily_probability_percent=_first(d.get("precipitation_probability_max")),
        ),
        conditions=Conditions(
            weather_code=w.get("weather_code"),
            description=weather_description(w.get("weather_code")),
            is_day=w.get("is_day") == 1,
        ),
        sun=Sun(
            sunrise=_first(d.get("sunrise")) or None,
            sunset=_first(d.get("sunset")) or None,
        ),
    )
