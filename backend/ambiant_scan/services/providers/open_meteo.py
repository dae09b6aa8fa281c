"""Open-Meteo APIs: geocoding, weather forecast and air quality.

All three endpoints are free and keyless.
"""

from ambiant_scan.services.providers.base import (
    EnvironmentalProvider,
    ForwardGeocodeProvider,
    HTTPProvider,
)

WEATHER_CURRENT_FIELDS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "rain",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "is_day",
]

WEATHER_DAILY_FIELDS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "sunrise",
    "sunset",
    "uv_index_max",
    "precipitation_sum",
    "precipitation_probability_max",
    "wind_speed_10m_max",
]

AIR_QUALITY_CURRENT_FIELDS = [
    "us_aqi",
    "pm10",
    "pm2_5",
    "carbon_monoxide",
    "nitrogen_dioxide",
    "sulphur_dioxide",
    "ozone",
    "dust",
    "uv_index",
    "uv_index_clear_sky",
]


class OpenMeteoGeocoder(HTTPProvider, ForwardGeocodeProvider):
    """City name search; only the best match is requested."""

    name = "open-meteo-geocoding"
    SEARCH_URL = "https://geocoding-api.open-meteo.com/v1/search"

    async def search(self, name: str) -> dict:
        params = {"name": name, "count": 1, "language": "en", "format": "json"}
        return await self._get_json(self.SEARCH_URL, params=params)


class OpenMeteoWeatherProvider(HTTPProvider, EnvironmentalProvider):
    """Current conditions plus today's daily aggregates."""

    name = "open-meteo-weather"
    FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

    async def fetch(self, lat: float, lon: float) -> dict:
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(WEATHER_CURRENT_FIELDS),
            "daily": ",".join(WEATHER_DAILY_FIELDS),
            "timezone": "auto",
            "forecast_days": 1,
        }
        return await self._get_json(self.FORECAST_URL, params=params)


class OpenMeteoAirQualityProvider(HTTPProvider, EnvironmentalProvider):
    """Current US AQI, pollutants and UV index."""

    name = "open-meteo-air-quality"
    AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"

    async def fetch(self, lat: float, lon: float) -> dict:
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(AIR_QUALITY_CURRENT_FIELDS),
            "timezone": "auto",
        }
        return await self._get_json(self.AIR_QUALITY_URL, params=params)
