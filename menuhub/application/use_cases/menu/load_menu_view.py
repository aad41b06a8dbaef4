"""Aggregated menu view for one tenant.

Seven independent reads (profile, categories, items, theme, language,
currency, popup) run concurrently against the tenant's connection. Each
read is isolated: a failing read is logged and replaced by its fallback,
so one broken table never blanks the whole menu.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from menuhub.application.interfaces import ImageStorage, ITenantDataStore
from menuhub.core.constants import (
    TABLE_CATEGORIES,
    TABLE_CURRENCY_SETTINGS,
    TABLE_LANGUAGE_SETTINGS,
    TABLE_MENU_ITEMS,
    TABLE_POPUP_SETTINGS,
    TABLE_RESTAURANT_CUSTOMIZATION,
    TABLE_RESTAURANT_PROFILE,
)
from menuhub.domain.entities import (
    DEFAULT_THEME,
    AggregatedMenuView,
    Category,
    CurrencySettings,
    LanguageSettings,
    MenuItem,
    PopupSettings,
    RestaurantProfile,
    Theme,
)
from menuhub.domain.exceptions import FieldFetchFailed
from menuhub.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")

ImageStorageFactory = Callable[[str], ImageStorage]

_ABSOLUTE_URL_PREFIXES = ("http://", "https://", "//", "data:")


def _parse_rows(model: type[M], rows: list[dict[str, Any]], table: str) -> list[M]:
    """Validate rows one by one; invalid rows are dropped with a warning."""
    parsed: list[M] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                "Dropping invalid %s row %r (%s errors)",
                table,
                row.get("id") if isinstance(row, dict) else None,
                e.error_count(),
            )
    return parsed


def _first(model: type[M], rows: list[dict[str, Any]], table: str) -> M | None:
    parsed = _parse_rows(model, rows[:1], table)
    return parsed[0] if parsed else None


def _display_order_key(display_order: int | None) -> tuple[bool, int]:
    # Rows without a position sort after positioned ones.
    return (display_order is None, display_order or 0)


def sort_categories(categories: list[Category]) -> list[Category]:
    return sorted(categories, key=lambda c: _display_order_key(c.display_order))


def sort_menu_items(items: list[MenuItem]) -> list[MenuItem]:
    """Featured first, then by display_order; ties keep their input order."""
    return sorted(
        items,
        key=lambda i: (not i.is_featured, *_display_order_key(i.display_order)),
    )


def theme_from_stored(stored: Any) -> Theme:
    """Merge a stored theme JSON over the default; anything unusable yields the default."""
    if not isinstance(stored, dict):
        return DEFAULT_THEME.model_copy()
    try:
        return Theme.merged_over_default(stored)
    except ValidationError:
        logger.warning("Stored theme is invalid; using default theme")
        return DEFAULT_THEME.model_copy()


class TenantDataAggregator:
    """Builds an AggregatedMenuView from one tenant connection.

    image_storage_factory maps a data endpoint to an ImageStorage used to
    turn stored ``image_path`` values into public URLs. Without it, only
    rows that already carry ``image_url`` get an image.
    """

    def __init__(self, image_storage_factory: ImageStorageFactory | None = None) -> None:
        self.image_storage_factory = image_storage_factory

    # Individual reads. Each may raise; _guard turns failures into fallbacks.

    async def _fetch_profile(self, conn: ITenantDataStore) -> RestaurantProfile | None:
        rows = await conn.select(TABLE_RESTAURANT_PROFILE, limit=1)
        return _first(RestaurantProfile, rows, TABLE_RESTAURANT_PROFILE)

    async def _fetch_categories(self, conn: ITenantDataStore) -> list[Category]:
        rows = await conn.select(
            TABLE_CATEGORIES,
            filters={"is_active": True},
            order=[("display_order", True)],
        )
        return sort_categories(_parse_rows(Category, rows, TABLE_CATEGORIES))

    async def _fetch_items(
        self, conn: ITenantDataStore, category_id: str | None
    ) -> list[MenuItem]:
        filters: dict[str, Any] = {"is_available": True}
        if category_id is not None:
            filters["category_id"] = category_id
        rows = await conn.select(
            TABLE_MENU_ITEMS,
            filters=filters,
            order=[("display_order", True)],
        )
        return sort_menu_items(_parse_rows(MenuItem, rows, TABLE_MENU_ITEMS))

    async def _fetch_theme(self, conn: ITenantDataStore) -> Theme:
        rows = await conn.select(
            TABLE_RESTAURANT_CUSTOMIZATION,
            order=[("updated_at", False)],
            limit=1,
            columns="theme",
        )
        return theme_from_stored(rows[0].get("theme") if rows else None)

    async def _fetch_language_settings(self, conn: ITenantDataStore) -> LanguageSettings | None:
        rows = await conn.select(TABLE_LANGUAGE_SETTINGS, limit=1)
        return _first(LanguageSettings, rows, TABLE_LANGUAGE_SETTINGS)

    async def _fetch_currency_settings(self, conn: ITenantDataStore) -> CurrencySettings | None:
        rows = await conn.select(TABLE_CURRENCY_SETTINGS, limit=1)
        return _first(CurrencySettings, rows, TABLE_CURRENCY_SETTINGS)

    async def _fetch_popup_settings(self, conn: ITenantDataStore) -> PopupSettings | None:
        rows = await conn.select(
            TABLE_POPUP_SETTINGS,
            filters={"enabled": True},
            order=[("created_at", False)],
            limit=1,
        )
        return _first(PopupSettings, rows, TABLE_POPUP_SETTINGS)

    async def _guard(
        self,
        field: str,
        fetch: Awaitable[T],
        fallback: Callable[[], T],
        degraded: list[str],
    ) -> T:
        """Await fetch; on any error log FieldFetchFailed and return fallback().

        Only Exception subclasses are contained, so task cancellation still
        propagates to the caller.
        """
        try:
            return await fetch
        except Exception as e:
            failure = FieldFetchFailed(field, f"{type(e).__name__}: {e}")
            logger.warning(
                "Menu field %s degraded to fallback: %s",
                field,
                failure.details["reason"],
            )
            degraded.append(field)
            return fallback()

    def _resolve_images(
        self,
        storage: ImageStorage | None,
        view: AggregatedMenuView,
    ) -> AggregatedMenuView:
        if storage is None:
            return view

        def public_url(path: str | None) -> str | None:
            if not path:
                return None
            if path.startswith(_ABSOLUTE_URL_PREFIXES):
                return path
            try:
                return storage.get_public_url(path)
            except Exception as e:
                logger.debug("Image path %r not resolvable: %s", path, type(e).__name__)
                return None

        def with_image(entity: M) -> M:
            if entity.image_url or not entity.image_path:
                return entity
            return entity.model_copy(update={"image_url": public_url(entity.image_path)})

        profile = view.profile
        if profile is not None:
            profile = profile.model_copy(
                update={
                    "logo_url": public_url(profile.logo_url),
                    "banner_url": public_url(profile.banner_url),
                }
            )
        return view.model_copy(
            update={
                "profile": profile,
                "categories": [with_image(c) for c in view.categories],
                "items": [with_image(i) for i in view.items],
            }
        )

    def _storage_for(self, conn: ITenantDataStore) -> ImageStorage | None:
        if self.image_storage_factory is None:
            return None
        try:
            return self.image_storage_factory(conn.endpoint)
        except Exception as e:
            logger.warning("Image storage unavailable for tenant: %s", type(e).__name__)
            return None

    @traced("menu.load_menu_view")
    async def load_menu_view(
        self,
        connection: ITenantDataStore,
        category_id: str | None = None,
    ) -> AggregatedMenuView:
        """Fetch every menu field concurrently and assemble the view.

        Args:
            connection: Live handle for the tenant.
            category_id: Restrict items to one category when given.

        Returns:
            AggregatedMenuView. categories/items are lists and theme is set
            even when their reads failed; ``degraded_fields`` names the
            fields that fell back.
        """
        degraded: list[str] = []
        (
            profile,
            categories,
            items,
            theme,
            language_settings,
            currency_settings,
            popup_settings,
        ) = await asyncio.gather(
            self._guard("profile", self._fetch_profile(connection), lambda: None, degraded),
            self._guard("categories", self._fetch_categories(connection), list, degraded),
            self._guard(
                "items", self._fetch_items(connection, category_id), list, degraded
            ),
            self._guard(
                "theme", self._fetch_theme(connection), DEFAULT_THEME.model_copy, degraded
            ),
            self._guard(
                "language_settings",
                self._fetch_language_settings(connection),
                lambda: None,
                degraded,
            ),
            self._guard(
                "currency_settings",
                self._fetch_currency_settings(connection),
                lambda: None,
                degraded,
            ),
            self._guard(
                "popup_settings",
                self._fetch_popup_settings(connection),
                lambda: None,
                degraded,
            ),
        )
        view = AggregatedMenuView(
            profile=profile,
            categories=categories,
            items=items,
            theme=theme,
            language_settings=language_settings,
            currency_settings=currency_settings,
            popup_settings=popup_settings,
            degraded_fields=sorted(degraded),
        )
        add_span_attributes(
            **{
                "menu.categories": len(view.categories),
                "menu.items": len(view.items),
                "menu.degraded": len(degraded),
            }
        )
        return self._resolve_images(self._storage_for(connection), view)
