"""Central restaurant directory backed by a Supabase ``restaurants`` table."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from menuhub.domain.entities import TenantRecord
from menuhub.domain.exceptions import DirectoryUnavailable, ValidationException
from menuhub.infrastructure.supabase._rest_client import (
    PostgrestError,
    escape_like,
    has_wildcard,
    request_async,
    rest_url,
)

logger = logging.getLogger(__name__)

_COLUMNS = "id,name,supabase_url,supabase_anon_key"
# Two rows are enough to tell a unique partial match from an ambiguous one.
_PARTIAL_LIMIT = 2


class _DirectoryRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictStr | StrictInt
    name: StrictStr
    supabase_url: StrictStr
    supabase_anon_key: StrictStr

    def to_record(self) -> TenantRecord:
        return TenantRecord(
            id=str(self.id),
            display_name=self.name,
            data_endpoint=self.supabase_url,
            data_access_key=self.supabase_anon_key,
        )


class SupabaseDirectoryStore:
    """Read-only directory lookups over PostgREST.

    Transport failures and 5xx answers raise DirectoryUnavailable; rows
    missing credentials are skipped with a warning.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        http_client: httpx.AsyncClient,
        table: str = "restaurants",
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._http = http_client
        self._table = table

    async def _fetch(self, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        try:
            rows = await request_async(
                self._http,
                rest_url(self._endpoint, self._table),
                self._api_key,
                params=[("select", _COLUMNS), *params],
                table=self._table,
            )
        except httpx.TransportError as e:
            raise DirectoryUnavailable(self._endpoint, type(e).__name__) from e
        except PostgrestError as e:
            if e.is_server_error:
                raise DirectoryUnavailable(self._endpoint, f"HTTP {e.status_code}") from e
            raise
        return rows if isinstance(rows, list) else []

    def _to_records(self, rows: list[dict[str, Any]]) -> list[TenantRecord]:
        records: list[TenantRecord] = []
        for row in rows:
            try:
                records.append(_DirectoryRow.model_validate(row).to_record())
            except (ValidationError, ValidationException):
                logger.warning(
                    "Skipping directory row %r with missing or invalid fields",
                    row.get("id") if isinstance(row, dict) else None,
                )
        return records

    async def find_by_exact_name(self, name: str) -> TenantRecord | None:
        rows = await self._fetch([("name", f"eq.{name}"), ("limit", "1")])
        records = self._to_records(rows)
        return records[0] if records else None

    async def find_by_partial_name(self, pattern: str) -> list[TenantRecord]:
        """Restaurants whose name contains ``pattern`` (case-insensitive).

        More than one matching row is ambiguous even when some of them are
        unusable, so in that case nothing is returned unless every row is valid.
        A pattern containing ``*`` cannot be matched literally and finds nothing.
        """
        if has_wildcard(pattern):
            logger.warning("Refusing partial lookup with wildcard pattern %r", pattern)
            return []
        rows = await self._fetch(
            [
                ("name", f"ilike.*{escape_like(pattern)}*"),
                ("limit", str(_PARTIAL_LIMIT)),
            ]
        )
        records = self._to_records(rows)
        if len(rows) > 1 and len(records) < len(rows):
            logger.warning(
                "Partial match for %r hit %s rows, %s unusable; treating as ambiguous",
                pattern,
                len(rows),
                len(rows) - len(records),
            )
            return []
        return records
