"""Navigation guard for menu loads.

A visitor switching restaurants (or categories) before the previous load
finishes must never see the earlier result. MenuSession cancels the
in-flight load when a new one starts; the superseded call returns None.
"""

from __future__ import annotations

import asyncio
import logging

from menuhub.application.use_cases.menu.open_menu import MenuService
from menuhub.domain.entities import AggregatedMenuView, TenantRecord

logger = logging.getLogger(__name__)


class MenuSession:
    """Serializes menu loads for one visitor; only the latest load wins."""

    def __init__(self, service: MenuService) -> None:
        self.service = service
        self._current: asyncio.Task | None = None
        self._generation = 0

    async def open(
        self, slug: str, category_id: str | None = None
    ) -> tuple[TenantRecord, AggregatedMenuView] | None:
        """Load a menu, cancelling any load still in flight.

        Returns:
            (record, view), or None if a newer open() superseded this one.

        Raises:
            Whatever MenuService.open_menu raises for the latest load.
        """
        self._generation += 1
        generation = self._generation
        previous = self._current
        if previous is not None and not previous.done():
            logger.debug("Cancelling superseded menu load")
            previous.cancel()
        task = asyncio.create_task(self.service.open_menu(slug, category_id=category_id))
        self._current = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation and task.cancelled():
                return None
            raise
        if generation != self._generation:
            return None
        return result

    def cancel(self) -> None:
        """Cancel the in-flight load (navigation away)."""
        self._generation += 1
        if self._current is not None and not self._current.done():
            self._current.cancel()
