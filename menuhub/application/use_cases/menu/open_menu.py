"""Open a public menu from its URL slug."""

from __future__ import annotations

import logging

from menuhub.application.interfaces import IConnectionCache
from menuhub.application.services.name_normalizer import expand_candidates
from menuhub.application.services.tenant_directory import TenantDirectoryClient
from menuhub.application.use_cases.menu.load_menu_view import TenantDataAggregator
from menuhub.domain.entities import AggregatedMenuView, TenantRecord
from menuhub.shared.telemetry.tracing import TracedOperation

logger = logging.getLogger(__name__)


class MenuService:
    """Slug to menu: normalize, resolve, connect, probe, aggregate.

    MalformedSlug, TenantNotFound and ConnectionUnavailable stop the
    pipeline before any menu data is read.
    """

    def __init__(
        self,
        directory: TenantDirectoryClient,
        connections: IConnectionCache,
        aggregator: TenantDataAggregator,
    ) -> None:
        self.directory = directory
        self.connections = connections
        self.aggregator = aggregator

    async def resolve(self, slug: str) -> TenantRecord:
        """Return the directory record for a slug (no data access)."""
        candidates = expand_candidates(slug)
        return await self.directory.resolve_tenant(candidates)

    async def open_menu(
        self, slug: str, category_id: str | None = None
    ) -> tuple[TenantRecord, AggregatedMenuView]:
        """Resolve slug and load its aggregated menu.

        Returns:
            (tenant record, aggregated view).

        Raises:
            MalformedSlug: slug cannot be normalized.
            TenantNotFound: no directory match.
            ConnectionUnavailable: directory or tenant endpoint unreachable.
        """
        async with TracedOperation("menu.open_menu") as op:
            record = await self.resolve(slug)
            op.set_attribute("tenant.id", record.id)
            connection = self.connections.get_connection(record)
            await connection.ping()
            view = await self.aggregator.load_menu_view(connection, category_id=category_id)
        if view.degraded_fields:
            logger.info(
                "Menu for tenant %s served with degraded fields: %s",
                record.id,
                ", ".join(view.degraded_fields),
            )
        return record, view
