"""IP locator: client IP -> geolocation, cached by raw IP string.

No private-address filtering happens here. Callers must check
:func:`ambiant_scan.utils.network.is_private_ip` first; a private address
handed to :meth:`IPLocatorService.resolve` goes to the provider and will
most likely come back as a ``LookupFailed``.
"""

import logging

from ambiant_scan.exceptions import LookupFailed, UpstreamUnavailable
from ambiant_scan.models import IPLocationRecord
from ambiant_scan.services.providers import IPGeolocationProvider
from ambiant_scan.utils.cache import TTLCache

logger = logging.getLogger(__name__)


class IPLocatorService:
    def __init__(
        self,
        provider: IPGeolocationProvider,
        cache: TTLCache[str, IPLocationRecord],
    ) -> None:
        self._provider = provider
        self._cache = cache

    async def resolve(self, ip: str) -> IPLocationRecord:
        """Geolocate ``ip``.

        Raises:
            LookupFailed: The provider answered with a non-success status.
            UpstreamUnavailable: The provider could not be reached or parsed.
        """
        cached = self._cache.get(ip)
        if cached is not None:
            return cached

        data = await self._provider.lookup(ip)
        if not isinstance(data, dict):
            raise UpstreamUnavailable("geoip", f"Unexpected payload: {type(data).__name__}")
        if data.get("status") != "success":
            message = data.get("message") or "GeoIP lookup failed"
            logger.info(f"[GEOIP] Lookup failed for {ip}: {message}")
            raise LookupFailed(message)

        try:
            record = IPLocationRecord(
                ip=data.get("query") or ip,
                lat=data.get("lat"),
                lon=data.get("lon"),
                city=data.get("city") or "Unknown",
                region=data.get("regionName") or "",
                region_code=data.get("region") or "",
                country=data.get("country") or "",
                country_code=data.get("countryCode") or "",
                zip=data.get("zip") or "",
                timezone=data.get("timezone") or "",
                isp=data.get("isp") or "",
                org=data.get("org") or "",
                as_=data.get("as") or "",
            )
        except ValueError as e:
            raise UpstreamUnavailable("geoip", f"Malformed record: {e}") from None
        self._cache.set(ip, record)
        logger.info(f"[GEOIP] {ip} -> {record.city}, {record.country_code}")
        return record
