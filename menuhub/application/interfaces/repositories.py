"""Data-access interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from menuhub.domain.entities import TenantRecord


class IDirectoryStore(Protocol):
    """Protocol for the central tenant directory (read-only)."""

    async def find_by_exact_name(self, name: str) -> TenantRecord | None:
        """Return the record whose display name equals name, or None."""

    async def find_by_partial_name(self, pattern: str) -> list[TenantRecord]:
        """Return records whose display name contains pattern (case-insensitive).

        Implementations may cap the number of rows but must return at least
        two when two or more match, so callers can detect ambiguity.
        """


class ITenantDataStore(Protocol):
    """Protocol for one tenant's hosted project (generic table access)."""

    @property
    def endpoint(self) -> str:
        """Base URL of the hosted project this handle is bound to."""

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[tuple[str, bool]] | None = None,
        limit: int | None = None,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Return rows of table matching equality filters.

        order is a sequence of (column, ascending) pairs.
        """

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> list[dict[str, Any]]:
        """Update rows matching filters and return the updated rows."""

    async def ping(self) -> None:
        """Raise ConnectionUnavailable if the endpoint cannot be reached."""
