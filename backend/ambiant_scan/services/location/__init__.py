"""Location resolver: reverse and forward geocoding with caching."""

from .service import LocationResolverService, ReverseGeocodeResult, placeholder_location

__all__ = [
    "LocationResolverService",
    "ReverseGeocodeResult",
    "placeholder_location",
]
