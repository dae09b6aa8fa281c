"""ip-api.com geolocation (free tier: 45 req/min, HTTP only)."""

from urllib.parse import quote

from ambiant_scan.services.providers.base import HTTPProvider, IPGeolocationProvider

IP_API_FIELDS = (
    "status,message,country,countryCode,region,regionName,city,zip,"
    "lat,lon,timezone,isp,org,as,query"
)


class IpApiGeolocationProvider(HTTPProvider, IPGeolocationProvider):
    name = "ip-api"
    # HTTPS needs the paid plan
    LOOKUP_URL = "http://ip-api.com/json/{ip}"

    async def lookup(self, ip: str) -> dict:
        url = self.LOOKUP_URL.format(ip=quote(ip, safe=""))
        return await self._get_json(url, params={"fields": IP_API_FIELDS})
