"""Diagnose a public menu link: which restaurant it resolves to and what loads.

Usage:
    uv run python -m scripts.resolve_menu <slug> [category_id]
Prints the resolved restaurant, the name candidates tried, item and category
counts, and any fields that fell back to defaults. The access key is never
printed.
"""

import asyncio
import sys

import httpx

from menuhub.application.services.name_normalizer import expand_candidates
from menuhub.application.services.tenant_directory import TenantDirectoryClient
from menuhub.application.use_cases.menu import MenuService, TenantDataAggregator
from menuhub.core.config import get_settings
from menuhub.domain.exceptions import MenuhubException
from menuhub.infrastructure.external.storage import ImageStorageFactory
from menuhub.infrastructure.supabase import SingleSlotConnectionCache, SupabaseDirectoryStore
from menuhub.shared.telemetry import setup_logging


async def main() -> None:
    """Resolve slug and summarize the aggregated menu."""
    if len(sys.argv) < 2:
        print("Usage: uv run python -m scripts.resolve_menu <slug> [category_id]", file=sys.stderr)
        sys.exit(1)
    slug = sys.argv[1]
    category_id = sys.argv[2] if len(sys.argv) > 2 else None

    setup_logging()
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
        service = MenuService(
            directory=TenantDirectoryClient(
                SupabaseDirectoryStore(
                    endpoint=settings.directory_url,
                    api_key=settings.directory_anon_key.get_secret_value(),
                    http_client=http,
                    table=settings.directory_table,
                ),
                retry_attempts=settings.directory_retry_attempts,
                retry_backoff_seconds=settings.directory_retry_backoff_seconds,
            ),
            connections=SingleSlotConnectionCache(http),
            aggregator=TenantDataAggregator(ImageStorageFactory(settings)),
        )
        try:
            print(f"Candidates: {list(expand_candidates(slug))}")
            record, view = await service.open_menu(slug, category_id=category_id)
        except MenuhubException as e:
            print(f"{e.error_code}: {e.message} {e.details}", file=sys.stderr)
            sys.exit(1)

    print(f"Restaurant: {record.display_name} (id={record.id})")
    print(f"Endpoint:   {record.data_endpoint}")
    print(f"Categories: {len(view.categories)}")
    print(f"Items:      {len(view.items)}")
    print(f"Theme:      {view.theme.mode.value}, primary {view.theme.primary_color}")
    if view.degraded_fields:
        print(f"Degraded:   {', '.join(view.degraded_fields)}")


if __name__ == "__main__":
    asyncio.run(main())
