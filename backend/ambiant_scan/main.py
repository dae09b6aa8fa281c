"""Ambiant Scan FastAPI Application.

Main entry point for the proxy server. Caches and upstream clients are built
once in the lifespan handler and torn down on shutdown.
"""

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ambiant_scan import SERVICE_NAME, __version__
from ambiant_scan.api import ApiError, ServiceContainer, router
from ambiant_scan.api.routes import AVAILABLE_ENDPOINTS
from ambiant_scan.config import Settings
from ambiant_scan.utils.timestamps import iso_now

logger = logging.getLogger(__name__)


class PrettyJSONResponse(JSONResponse):
    """JSON response indented for humans reading it in a browser or curl."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, indent=2, ensure_ascii=False).encode("utf-8")


POWERED_BY = f"Ambiant-Scan/{__version__}"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    """Standard error envelope.

    Carries its own headers: 500 responses are rendered outside the
    ``cache_headers`` middleware.
    """
    body = {"error": True, "status": status_code, "message": message}
    if details:
        body["details"] = details
    body["timestamp"] = iso_now()
    return PrettyJSONResponse(
        status_code=status_code,
        content=body,
        headers={"Cache-Control": "no-cache", "X-Powered-By": POWERED_BY},
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Runtime settings. Read from the environment when omitted.
        services: Pre-built services (tests inject fakes here). Built from
            ``settings`` in the lifespan when omitted.
    """
    settings = settings or (services.settings if services else Settings.from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        app.state.services = services or ServiceContainer.build(settings)
        app.state.started_at = time.monotonic()
        logger.info(
            f"[HTTP] {SERVICE_NAME} v{__version__} on port {settings.port} "
            f"(data TTL {settings.cache_ttl_seconds}s, geo TTL {settings.geo_cache_ttl_seconds}s, "
            f"max {settings.max_cache_entries} entries per cache)"
        )
        yield
        # Shutdown
        await app.state.services.close()

    app = FastAPI(
        title="Ambiant Scan API",
        description="Caching aggregation proxy for weather, air quality and geolocation",
        version=__version__,
        lifespan=lifespan,
        default_response_class=PrettyJSONResponse,
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def cache_headers(request: Request, call_next):
        # Every OPTIONS is answered here, preflight headers or not
        if request.method == "OPTIONS":
            response = Response(status_code=204, headers=CORS_HEADERS)
        else:
            response = await call_next(request)
        if response.status_code == 200:
            response.headers["Cache-Control"] = f"public, max-age={settings.cache_ttl_seconds}"
        else:
            response.headers["Cache-Control"] = "no-cache"
        response.headers["X-Powered-By"] = POWERED_BY
        return response

    # Global exception handlers
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(400, "Invalid request parameters", str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_response(404, "Not found", {"available_endpoints": AVAILABLE_ENDPOINTS})
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[HTTP] {request.method} {request.url.path} failed")
        return error_response(500, "Internal server error", str(exc))

    app.include_router(router)

    @app.get("/health")
    async def health_check(request: Request) -> dict:
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": __version__,
            "uptime_seconds": int(time.monotonic() - request.app.state.started_at),
            "timestamp": iso_now(),
        }

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)
app = create_app(_settings)
