"""Fill missing translations for one restaurant's categories and menu items.

Usage:
    uv run python -m scripts.auto_translate <slug> <target_lang> [categories|menu_items]
Existing translations are never overwritten; each new value is marked
auto_translated in translation_metadata.
"""

import asyncio
import sys

import httpx

from menuhub.application.services.name_normalizer import expand_candidates
from menuhub.application.services.tenant_directory import TenantDirectoryClient
from menuhub.application.use_cases.translation import AutoTranslateService
from menuhub.core.config import get_settings
from menuhub.domain.enums import TranslatableKind
from menuhub.domain.exceptions import MenuhubException
from menuhub.infrastructure.external.translation import HttpTranslator
from menuhub.infrastructure.supabase import SupabaseDirectoryStore, TenantConnection
from menuhub.shared.telemetry import setup_logging

_KINDS = {kind.table: kind for kind in TranslatableKind}


async def main() -> None:
    """Translate every row of the selected tables into target_lang."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.auto_translate <slug> <target_lang> "
            "[categories|menu_items]",
            file=sys.stderr,
        )
        sys.exit(1)
    slug, target_lang = sys.argv[1], sys.argv[2]
    tables = sys.argv[3:] or list(_KINDS)
    unknown = [t for t in tables if t not in _KINDS]
    if unknown:
        print(f"Unknown table(s): {', '.join(unknown)}", file=sys.stderr)
        sys.exit(1)

    setup_logging()
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
        directory = TenantDirectoryClient(
            SupabaseDirectoryStore(
                endpoint=settings.directory_url,
                api_key=settings.directory_anon_key.get_secret_value(),
                http_client=http,
                table=settings.directory_table,
            ),
            retry_attempts=settings.directory_retry_attempts,
            retry_backoff_seconds=settings.directory_retry_backoff_seconds,
        )
        service = AutoTranslateService(
            HttpTranslator(
                settings.translation_primary_url,
                settings.translation_fallback_url,
                http_client=http,
            )
        )
        try:
            record = await directory.resolve_tenant(expand_candidates(slug))
            connection = TenantConnection(record, http)
            await connection.ping()
        except MenuhubException as e:
            print(f"{e.error_code}: {e.message}", file=sys.stderr)
            sys.exit(1)

        changed = failed = 0
        for table in tables:
            kind = _KINDS[table]
            rows = await connection.select(table, order=[("display_order", True)])
            for row in rows:
                try:
                    result = await service.translate_entity(connection, kind, row, target_lang)
                except MenuhubException as e:
                    failed += 1
                    print(f"  {table} {row.get('id')}: {e.message}", file=sys.stderr)
                    continue
                if result.changed:
                    changed += 1
                    print(f"  {table} {result.entity_id}: {', '.join(result.translations)}")
        print(f"{record.display_name}: {changed} rows translated, {failed} failed")


if __name__ == "__main__":
    asyncio.run(main())
