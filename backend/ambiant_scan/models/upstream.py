"""Shapes of the raw Open-Meteo responses.

Lenient: every field is optional and unknown keys are ignored. A payload
that still fails validation (a string where a number belongs, a list where
an object belongs) is treated as missing for that source.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

Number = Optional[Union[int, float]]


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="ignore")


class WeatherCurrent(_Upstream):
    temperature_2m: Number = None
    relative_humidity_2m: Number = None
    apparent_temperature: Number = None
    precipitation: Number = None
    rain: Number = None
    weather_code: Optional[int] = None
    cloud_cover: Number = None
    pressure_msl: Number = None
    surface_pressure: Number = None
    wind_speed_10m: Number = None
    wind_direction_10m: Number = None
    wind_gusts_10m: Number = None
    is_day: Number = None


class WeatherDaily(_Upstream):
    temperature_2m_max: list[Number] = []
    temperature_2m_min: list[Number] = []
    sunrise: list[Optional[str]] = []
    sunset: list[Optional[str]] = []
    uv_index_max: list[Number] = []
    precipitation_sum: list[Number] = []
    precipitation_probability_max: list[Number] = []
    wind_speed_10m_max: list[Number] = []


class WeatherResponse(_Upstream):
    timezone: Optional[str] = None
    elevation: Number = None
    current: Optional[WeatherCurrent] = None
    current_units: Optional[dict[str, Optional[str]]] = None
    daily: Optional[WeatherDaily] = None


class AirQualityCurrent(_Upstream):
    us_aqi: Number = None
    pm10: Number = None
    pm2_5: Number = None
    carbon_monoxide: Number = None
    nitrogen_dioxide: Number = None
    sulphur_dioxide: Number = None
    ozone: Number = None
    dust: Number = None
    uv_index: Number = None
    uv_index_clear_sky: Number = None


class AirQualityResponse(_Upstream):
    current: Optional[AirQualityCurrent] = None
    current_units: Optional[dict[str, Optional[str]]] = None
