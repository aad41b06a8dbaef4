"""Presentation-layer dependency injection (composition root).

Long-lived infrastructure (HTTP pool, connection cache, Redis) is created
in the lifespan and kept on app.state; the per-request services here are
thin wrappers around it. Tests override get_menu_service.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from menuhub.application.services.tenant_directory import TenantDirectoryClient
from menuhub.application.use_cases.menu import MenuService, TenantDataAggregator
from menuhub.core.config import Settings, get_settings
from menuhub.infrastructure.supabase import SupabaseDirectoryStore

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_directory_client(request: Request, settings: SettingsDep) -> TenantDirectoryClient:
    """Directory client over the shared HTTP pool, with the Redis cache when enabled."""
    store = SupabaseDirectoryStore(
        endpoint=settings.directory_url,
        api_key=settings.directory_anon_key.get_secret_value(),
        http_client=request.app.state.http_client,
        table=settings.directory_table,
    )
    return TenantDirectoryClient(
        store,
        cache=getattr(request.app.state, "cache", None),
        cache_ttl=settings.cache_ttl_tenants,
        retry_attempts=settings.directory_retry_attempts,
        retry_backoff_seconds=settings.directory_retry_backoff_seconds,
    )


def get_menu_service(
    request: Request,
    directory: Annotated[TenantDirectoryClient, Depends(get_directory_client)],
) -> MenuService:
    return MenuService(
        directory=directory,
        connections=request.app.state.connection_cache,
        aggregator=TenantDataAggregator(request.app.state.image_storage_factory),
    )


MenuServiceDep = Annotated[MenuService, Depends(get_menu_service)]
