"""BigDataCloud reverse geocoding (free client endpoint, no API key)."""

from ambiant_scan.services.providers.base import HTTPProvider, ReverseGeocodeProvider


class BigDataCloudReverseGeocoder(HTTPProvider, ReverseGeocodeProvider):
    """Reverse geocoder backed by ``reverse-geocode-client``."""

    name = "bigdatacloud"
    REVERSE_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"

    async def reverse(self, lat: float, lon: float) -> dict:
        params = {
            "latitude": lat,
            "longitude": lon,
            "localityLanguage": "en",
        }
        return await self._get_json(self.REVERSE_URL, params=params)
