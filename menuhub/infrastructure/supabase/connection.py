"""Live data handle for one tenant's hosted project."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from menuhub.domain.entities import TenantRecord
from menuhub.domain.exceptions import ConnectionUnavailable
from menuhub.infrastructure.supabase._rest_client import (
    PostgrestError,
    encode_filters,
    encode_order,
    request_async,
    rest_url,
)

logger = logging.getLogger(__name__)

# Statuses that mean the project is up but refuses this key.
_REJECTED_KEY_STATUSES = (401, 403)


class TenantConnection:
    """PostgREST access to one tenant, bound to a single data endpoint.

    Created and owned by a connection cache. The underlying httpx client is
    shared process-wide and is never closed by the handle.
    """

    def __init__(self, record: TenantRecord, http_client: httpx.AsyncClient) -> None:
        self._endpoint = record.data_endpoint
        self._api_key = record.data_access_key
        self._http = http_client

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def __repr__(self) -> str:
        return f"TenantConnection(endpoint={self._endpoint!r})"

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[tuple[str, bool]] | None = None,
        limit: int | None = None,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Return rows of table matching equality filters."""
        params: list[tuple[str, str]] = [("select", columns)]
        params.extend(encode_filters(filters))
        order_clause = encode_order(order)
        if order_clause:
            params.append(("order", order_clause))
        if limit is not None:
            params.append(("limit", str(limit)))
        rows = await request_async(
            self._http,
            rest_url(self._endpoint, table),
            self._api_key,
            params=params,
            table=table,
        )
        if not isinstance(rows, list):
            raise PostgrestError(200, "expected a JSON array of rows", table=table)
        return rows

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> list[dict[str, Any]]:
        """PATCH rows matching filters; returns the updated rows.

        Refuses an empty filter so a bad call can never rewrite a whole table.
        """
        if not filters:
            raise ValueError("update requires at least one filter")
        rows = await request_async(
            self._http,
            rest_url(self._endpoint, table),
            self._api_key,
            method="PATCH",
            params=encode_filters(filters),
            body=values,
            prefer="return=representation",
            table=table,
        )
        return rows if isinstance(rows, list) else []

    async def ping(self) -> None:
        """Probe the REST root; raise ConnectionUnavailable when unreachable.

        Unreachable means a transport failure, a 5xx, or a rejected key.
        Other 4xx answers prove the project is up.
        """
        try:
            resp = await self._http.get(
                rest_url(self._endpoint),
                headers={"apikey": self._api_key, "Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.TransportError as e:
            logger.warning("Tenant endpoint %s unreachable: %s", self._endpoint, type(e).__name__)
            raise ConnectionUnavailable(self._endpoint, type(e).__name__) from e
        if resp.status_code >= 500 or resp.status_code in _REJECTED_KEY_STATUSES:
            logger.warning(
                "Tenant endpoint %s answered HTTP %s", self._endpoint, resp.status_code
            )
            raise ConnectionUnavailable(self._endpoint, f"HTTP {resp.status_code}")
