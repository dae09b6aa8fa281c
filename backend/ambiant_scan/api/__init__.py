"""HTTP API for Ambiant Scan."""

from .dependencies import ServiceContainer, get_services
from .routes import ApiError, router

__all__ = ["ApiError", "ServiceContainer", "get_services", "router"]
