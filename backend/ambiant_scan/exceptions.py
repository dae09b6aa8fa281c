"""Exception hierarchy for upstream and lookup failures."""

from ambiant_scan.models import ErrorCode


class AmbiantScanError(Exception):
    """Base exception for all service-level failures."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UpstreamUnavailable(AmbiantScanError):
    """A single upstream provider failed (network, timeout, non-2xx, bad JSON)."""

    code = ErrorCode.UPSTREAM_UNAVAILABLE

    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        super().__init__(f"[{provider_name}] {message}")


class NotFound(AmbiantScanError):
    """Forward geocoding returned no match."""

    code = ErrorCode.NOT_FOUND


class AllSourcesUnavailable(AmbiantScanError):
    """Every environmental provider failed for one scan."""

    code = ErrorCode.ALL_SOURCES_UNAVAILABLE

    def __init__(self, message: str = "All environmental data sources are unavailable"):
        super().__init__(message)


class LookupFailed(AmbiantScanError):
    """IP geolocation provider reported a non-success status."""

    code = ErrorCode.LOOKUP_FAILED
