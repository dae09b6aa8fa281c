"""API routes for Ambiant Scan.

Endpoints:
- GET /scan?lat=XX&lon=YY   full environmental scan at a GPS position
- GET /scan?city=NAME       scan by city name (takes precedence over lat/lon)
- GET /geoip                caller geolocation via IP
- GET /cache/stats          per-store cache statistics
- DELETE /cache             flush all caches

The routes only translate HTTP to service calls and service failures to
status codes; caching and upstream handling live in the services.
"""

import logging
import math
import time
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request

from ambiant_scan.api.dependencies import ServiceContainer, get_services
from ambiant_scan.exceptions import (
    AllSourcesUnavailable,
    LookupFailed,
    NotFound,
    UpstreamUnavailable,
)
from ambiant_scan.models import LocationRecord
from ambiant_scan.utils.geo import round_coords
from ambiant_scan.utils.network import client_ip_from_headers, is_private_ip
from ambiant_scan.utils.timestamps import iso_now

logger = logging.getLogger(__name__)

router = APIRouter()

AVAILABLE_ENDPOINTS = [
    "GET /scan?lat=XX&lon=YY",
    "GET /scan?city=NAME",
    "GET /geoip",
    "GET /health",
    "GET /cache/stats",
    "DELETE /cache",
]

SCAN_EXAMPLES = [
    "/scan?lat=45.50&lon=-73.57",
    "/scan?city=Montreal",
    "/scan?city=Tokyo",
]


class ApiError(Exception):
    """Raised by routes; rendered as the standard error envelope."""

    def __init__(self, status_code: int, message: str, details: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(message)


def _parse_coordinate(raw: str, low: float, high: float) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value < low or value > high:
        return None
    return value


@router.get("/scan")
async def scan(
    city: Optional[str] = None,
    lat: Optional[str] = None,
    lon: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
) -> dict:
    """Environmental scan for a city or a GPS position."""
    start = time.perf_counter()
    location: LocationRecord

    if city:
        try:
            location = await services.locations.forward_geocode(city)
        except NotFound as e:
            raise ApiError(404, e.message) from None
        except UpstreamUnavailable as e:
            logger.warning(f"[HTTP] City lookup failed for '{city}': {e}")
            raise ApiError(502, "City lookup failed", e.message) from None
        scan_lat, scan_lon = location.lat, location.lon
    elif lat and lon:
        parsed_lat = _parse_coordinate(lat, -90, 90)
        parsed_lon = _parse_coordinate(lon, -180, 180)
        if parsed_lat is None or parsed_lon is None:
            raise ApiError(
                400, "Invalid coordinates. lat must be -90..90, lon must be -180..180"
            )
        scan_lat, scan_lon = round_coords(parsed_lat, parsed_lon)
        result = await services.locations.reverse_geocode(scan_lat, scan_lon)
        if result.degraded:
            logger.info(f"[HTTP] Using placeholder location for {scan_lat},{scan_lon}")
        location = result.location
    else:
        raise ApiError(
            400,
            "Missing parameters. Provide ?lat=XX&lon=YY or ?city=NAME",
            {"examples": SCAN_EXAMPLES},
        )

    try:
        snapshot = await services.scans.perform_scan(scan_lat, scan_lon, location)
    except AllSourcesUnavailable as e:
        raise ApiError(503, e.message) from None

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    return snapshot.annotate(response_time_ms=elapsed_ms).to_response()


@router.get("/geoip")
async def geoip(
    request: Request,
    services: ServiceContainer = Depends(get_services),
) -> dict:
    """Geolocate the caller from proxy headers or the socket address."""
    socket_address = request.client.host if request.client else None
    ip, source = client_ip_from_headers(request.headers, socket_address)

    if not ip or is_private_ip(ip):
        return {
            "warning": "Private or localhost IP detected — geolocation unavailable",
            "ip": ip or "unknown",
            "source": source,
            "hint": "Deploy behind a reverse proxy or on Fly.io for real client IPs",
            "timestamp": iso_now(),
        }

    try:
        record = await services.geoip.resolve(ip)
    except (LookupFailed, UpstreamUnavailable) as e:
        raise ApiError(502, "GeoIP lookup failed", e.message) from None

    return {
        **record.model_dump(by_alias=True),
        "source": source,
        "timestamp": iso_now(),
    }


@router.get("/cache/stats")
async def cache_stats(services: ServiceContainer = Depends(get_services)) -> dict:
    return {
        "caches": [stats.model_dump(by_alias=True) for stats in services.caches.stats()],
        "timestamp": iso_now(),
    }


@router.delete("/cache")
async def flush_cache(services: ServiceContainer = Depends(get_services)) -> dict:
    flushed = services.caches.flush_all()
    return {
        "message": "All caches flushed",
        "flushedEntries": flushed,
        "timestamp": iso_now(),
    }
