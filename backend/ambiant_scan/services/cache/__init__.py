"""In-memory cache registry."""

from .service import CacheRegistry

__all__ = ["CacheRegistry"]
