"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring of infrastructure: the shared
outbound HTTP client, the tenant connection cache and the optional Redis
cache. Telemetry is initialized in create_app() and only flushed here.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from menuhub.core.config import get_settings
from menuhub.infrastructure.external.storage import ImageStorageFactory
from menuhub.infrastructure.supabase import build_connection_cache
from menuhub.shared.telemetry import get_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: shared HTTP client, connection cache, image storage
    factory, Redis cache (if enabled). Shutdown runs in reverse, then
    flushes telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    # One pool for the directory and every tenant project; handles never close it.
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    app.state.connection_cache = build_connection_cache(
        settings.connection_cache_mode,
        app.state.http_client,
        max_size=settings.connection_cache_max_size,
    )
    app.state.image_storage_factory = ImageStorageFactory(settings)
    logger.info("Connection cache mode: %s", settings.connection_cache_mode)

    if settings.redis_enabled:
        from menuhub.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None

    yield

    # ---- Shutdown ----
    if app.state.cache is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    app.state.connection_cache.clear()
    await app.state.http_client.aclose()
    app.state.http_client = None
    logger.info("HTTP client closed")

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
