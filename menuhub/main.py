"""ASGI app for the public menu API (`uvicorn menuhub.main:app`).

Wiring only: lifespan, exception handlers, middleware, routers. See
menuhub.core.lifespan and menuhub.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from menuhub.api.v1 import api_router
from menuhub.core.config import get_settings
from menuhub.core.exception_handlers import register_exception_handlers
from menuhub.core.lifespan import create_lifespan
from menuhub.core.limiter import limiter
from menuhub.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from menuhub.shared.telemetry import TelemetryConfig, set_telemetry, setup_logging


def _setup_telemetry(app: FastAPI) -> None:
    """Initialize tracing before the first request so every client created later is instrumented."""
    settings = get_settings()
    telemetry = TelemetryConfig.from_settings(settings)
    provider = telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    if provider is not None:
        telemetry.instrument_all(app)
    set_telemetry(telemetry)


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # First added = innermost. Effective order: request ID -> security headers -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    if settings.telemetry_enabled:
        _setup_telemetry(app)

    return app


app = create_app()
