"""Thin PostgREST / Supabase REST helpers (no supabase-py).

Every hosted project (the central directory and each tenant) is reached
through the same shared httpx.AsyncClient; only the base URL and API key
differ per call. Query encoding follows PostgREST conventions:
``col=eq.value``, ``col=is.null``, ``order=col.asc,other.desc``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

REST_PATH = "/rest/v1"


class PostgrestError(Exception):
    """Non-success response from a PostgREST endpoint.

    The response body is kept in ``body`` for logs; it is never shown to
    end users.
    """

    def __init__(self, status_code: int, body: str, table: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.table = table
        super().__init__(f"PostgREST request failed with HTTP {status_code}")

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500


def rest_url(endpoint: str, table: str = "") -> str:
    """Return ``<endpoint>/rest/v1/<table>``."""
    return f"{endpoint.rstrip('/')}{REST_PATH}/{table}"


def auth_headers(api_key: str) -> dict[str, str]:
    """Supabase expects the key both as ``apikey`` and as a bearer token."""
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {api_key}",
        "Accept": "application/json",
    }


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_filters(filters: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Encode equality filters; None becomes ``is.null``, booleans ``is.true``/``is.false``."""
    params: list[tuple[str, str]] = []
    for column, value in (filters or {}).items():
        if value is None:
            params.append((column, "is.null"))
        elif isinstance(value, bool):
            params.append((column, f"is.{_encode_scalar(value)}"))
        else:
            params.append((column, f"eq.{_encode_scalar(value)}"))
    return params


def encode_order(order: Sequence[tuple[str, bool]] | None) -> str | None:
    """Encode (column, ascending) pairs as a PostgREST order clause.

    Nulls sort last in both directions so rows without an explicit position
    never jump ahead of positioned ones.
    """
    if not order:
        return None
    return ",".join(
        f"{column}.{'asc' if ascending else 'desc'}.nullslast" for column, ascending in order
    )


def escape_like(pattern: str) -> str:
    """Escape LIKE metacharacters so user text matches literally in ``ilike``.

    PostgREST also reads ``*`` as ``%`` and offers no escape for it; callers
    must reject patterns containing ``*`` (see has_wildcard).
    """
    return (
        pattern.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def has_wildcard(pattern: str) -> bool:
    return "*" in pattern


async def request_async(
    client: httpx.AsyncClient,
    url: str,
    api_key: str,
    method: str = "GET",
    params: Sequence[tuple[str, str]] | None = None,
    body: Mapping[str, Any] | None = None,
    prefer: str | None = None,
    table: str | None = None,
) -> Any:
    """Perform one PostgREST call and return the decoded JSON body.

    Transport failures propagate as httpx.TransportError. Any non-2xx
    status raises PostgrestError. An empty body returns an empty list.
    """
    headers = auth_headers(api_key)
    if prefer:
        headers["Prefer"] = prefer
    if method == "GET":
        resp = await client.get(url, headers=headers, params=params)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, params=params, json=body)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if not resp.is_success:
        raise PostgrestError(resp.status_code, resp.text[:500], table=table)
    raw = resp.content
    return json.loads(raw.decode()) if raw else []
