"""IP geolocation with caching."""

from .service import IPLocatorService

__all__ = ["IPLocatorService"]
