"""Environment-driven settings.

Values come from the process environment, with a ``.env`` file in the
working directory loaded first when present.
"""

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the proxy."""

    host: str = "0.0.0.0"
    port: int = 3400
    # Environmental data changes quickly, geocoding results almost never.
    cache_ttl_seconds: int = 600
    geo_cache_ttl_seconds: int = 86400
    max_cache_entries: int = 5000
    upstream_timeout_seconds: float = 8.0
    geoip_timeout_seconds: float = 5.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ`` after .env)."""
        if env is None:
            load_dotenv()
            env = os.environ
        return cls(
            host=env.get("HOST", cls.host),
            port=_int_env(env, "PORT", cls.port),
            cache_ttl_seconds=_int_env(env, "CACHE_TTL_SECONDS", cls.cache_ttl_seconds),
            geo_cache_ttl_seconds=_int_env(
                env, "GEO_CACHE_TTL_SECONDS", cls.geo_cache_ttl_seconds
            ),
            max_cache_entries=_int_env(env, "MAX_CACHE_ENTRIES", cls.max_cache_entries),
            upstream_timeout_seconds=_float_env(
                env, "UPSTREAM_TIMEOUT_SECONDS", cls.upstream_timeout_seconds
            ),
            geoip_timeout_seconds=_float_env(
                env, "GEOIP_TIMEOUT_SECONDS", cls.geoip_timeout_seconds
            ),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )
