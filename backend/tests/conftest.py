"""Shared pytest fixtures: fake clock, in-process fake providers, sample payloads."""

import asyncio
import copy
from typing import Optional

import pytest

from ambiant_scan.services.providers import (
    EnvironmentalProvider,
    ForwardGeocodeProvider,
    IPGeolocationProvider,
    ReverseGeocodeProvider,
)

WEATHER_PAYLOAD = {
    "latitude": 45.5,
    "longitude": -73.57,
    "timezone": "America/Toronto",
    "elevation": 42.0,
    "current_units": {"temperature_2m": "°C"},
    "current": {
        "temperature_2m": 21.4,
        "relative_humidity_2m": 55,
        "apparent_temperature": 20.9,
        "precipitation": 0.0,
        "rain": 0.0,
        "weather_code": 2,
        "cloud_cover": 40,
        "pressure_msl": 1015.2,
        "surface_pressure": 1010.1,
        "wind_speed_10m": 14.2,
        "wind_direction_10m": 225,
        "wind_gusts_10m": 28.8,
        "is_day": 1,
    },
    "daily": {
        "temperature_2m_max": [24.1],
        "temperature_2m_min": [15.3],
        "sunrise": ["2024-06-01T05:07"],
        "sunset": ["2024-06-01T20:38"],
        "uv_index_max": [7.35],
        "precipitation_sum": [0.4],
        "precipitation_probability_max": [20],
        "wind_speed_10m_max": [22.7],
    },
}

AIR_QUALITY_PAYLOAD = {
    "latitude": 45.5,
    "longitude": -73.57,
    "current_units": {"pm2_5": "μg/m³", "pm10": "μg/m³"},
    "current": {
        "us_aqi": 42,
        "pm10": 12.3,
        "pm2_5": 8.1,
        "carbon_monoxide": 180.0,
        "nitrogen_dioxide": 9.4,
        "sulphur_dioxide": 1.2,
        "ozone": 61.0,
        "dust": 0.0,
        "uv_index": 4.5,
        "uv_index_clear_sky": 5.1,
    },
}

REVERSE_PAYLOAD = {
    "city": "Montreal",
    "locality": "Ville-Marie",
    "principalSubdivision": "Quebec",
    "countryName": "Canada",
    "countryCode": "CA",
}

FORWARD_PAYLOAD = {
    "results": [
        {
            "name": "Montreal",
            "admin1": "Quebec",
            "country": "Canada",
            "country_code": "CA",
            "latitude": 45.50884,
            "longitude": -73.58781,
        }
    ]
}

IP_PAYLOAD = {
    "status": "success",
    "query": "24.48.0.1",
    "lat": 45.6085,
    "lon": -73.5493,
    "city": "Montreal",
    "region": "QC",
    "regionName": "Quebec",
    "country": "Canada",
    "countryCode": "CA",
    "zip": "H1K",
    "timezone": "America/Toronto",
    "isp": "Le Groupe Videotron Ltee",
    "org": "Videotron Ltee",
    "as": "AS5769 Videotron Ltee",
}


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class _FakeProvider:
    """Returns a canned payload (deep-copied) or raises a canned error."""

    def __init__(
        self,
        payload: Optional[dict] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.payload = payload
        self.error = error
        self.delay = delay
        self.calls: list[tuple] = []

    async def _respond(self, *args) -> dict:
        self.calls.append(args)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.payload)


class FakeEnvironmentalProvider(_FakeProvider, EnvironmentalProvider):
    def __init__(self, name: str = "fake-env", **kwargs) -> None:
        super().__init__(**kwargs)
        self.name = name

    async def fetch(self, lat: float, lon: float) -> dict:
        return await self._respond(lat, lon)


class FakeReverseProvider(_FakeProvider, ReverseGeocodeProvider):
    async def reverse(self, lat: float, lon: float) -> dict:
        return await self._respond(lat, lon)


class FakeForwardProvider(_FakeProvider, ForwardGeocodeProvider):
    async def search(self, name: str) -> dict:
        return await self._respond(name)


class FakeIPProvider(_FakeProvider, IPGeolocationProvider):
    async def lookup(self, ip: str) -> dict:
        return await self._respond(ip)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
