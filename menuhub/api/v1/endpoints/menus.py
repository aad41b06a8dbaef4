"""Public menu endpoints: aggregated menu, menu search, canonical link.

No authentication: anyone holding a menu link may read the menu. Reads are
rate-limited per client address.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from menuhub.api.v1.dependencies import MenuServiceDep, SettingsDep
from menuhub.application.services.localization import resolve_language, supported_languages
from menuhub.application.services.menu_links import build_menu_url
from menuhub.application.services.menu_search import search_menu
from menuhub.application.services.pricing import enabled_currencies
from menuhub.core.config import Settings
from menuhub.core.limiter import limit_menu_reads
from menuhub.domain.entities import AggregatedMenuView
from menuhub.schemas.error import ErrorResponse
from menuhub.schemas.menu import (
    MenuLayout,
    MenuLinkResponse,
    MenuPresenter,
    MenuResponse,
    MenuSearchResponse,
)

router = APIRouter()

_RESOLUTION_ERRORS = {
    400: {"model": ErrorResponse, "description": "Malformed menu link"},
    404: {"model": ErrorResponse, "description": "Restaurant not found"},
    503: {"model": ErrorResponse, "description": "Menu temporarily unavailable"},
}

LangQuery = Annotated[
    str | None, Query(max_length=8, description="Display language (e.g. sq, en, it)")
]
CurrencyQuery = Annotated[
    str | None, Query(max_length=8, description="Display currency (e.g. ALL, EUR)")
]


def _presenter(
    view: AggregatedMenuView,
    lang: str | None,
    currency: str | None,
    settings: Settings,
) -> tuple[MenuPresenter, list[str], list[str]]:
    """Pick language and currency for a view.

    Unsupported requests fall back to tenant defaults, as does a currency
    whose stored exchange rate is unusable.
    """
    languages = supported_languages(view.language_settings)
    language = resolve_language(lang, view.language_settings, settings.default_language)
    currency_settings = view.currency_settings
    currencies = enabled_currencies(currency_settings)
    base_currency = (
        currency_settings.default_currency
        if currency_settings and currency_settings.default_currency
        else settings.default_currency
    )
    chosen = currency if currency and currency in currencies else base_currency
    presenter = MenuPresenter(
        language=language,
        currency=chosen,
        base_currency=base_currency,
        rates=dict(currency_settings.exchange_rates) if currency_settings else {},
        strict_rates=settings.currency_strict_rates,
    )
    if chosen != base_currency and not presenter.can_convert(base_currency, chosen):
        presenter.currency = base_currency
    return presenter, languages, currencies


@router.get("/{slug}", response_model=MenuResponse, responses=_RESOLUTION_ERRORS)
@limit_menu_reads
async def get_menu(
    request: Request,
    slug: str,
    service: MenuServiceDep,
    settings: SettingsDep,
    category_id: Annotated[str | None, Query(max_length=64)] = None,
    lang: LangQuery = None,
    currency: CurrencyQuery = None,
) -> MenuResponse:
    """Resolve a menu link and return the restaurant's full menu.

    Fields whose data could not be read fall back to empty values and are
    listed in ``degraded_fields``.
    """
    record, view = await service.open_menu(slug, category_id=category_id)
    presenter, languages, currencies = _presenter(view, lang, currency, settings)
    return presenter.menu(record, view, languages, currencies)


@router.get("/{slug}/search", response_model=MenuSearchResponse, responses=_RESOLUTION_ERRORS)
@limit_menu_reads
async def search(
    request: Request,
    slug: str,
    service: MenuServiceDep,
    settings: SettingsDep,
    q: Annotated[str, Query(max_length=100, description="Search term")] = "",
    lang: LangQuery = None,
    currency: CurrencyQuery = None,
) -> MenuSearchResponse:
    """Items whose localized name, description or category name contains q."""
    _, view = await service.open_menu(slug)
    presenter, _, _ = _presenter(view, lang, currency, settings)
    matches = search_menu(view.items, q, presenter.language, view.categories)
    return MenuSearchResponse(
        query=q,
        language=presenter.language,
        currency=presenter.currency,
        items=[presenter.item(item) for item in matches],
        degraded_fields=presenter.degraded_fields(view),
    )


@router.get("/{slug}/link", response_model=MenuLinkResponse, responses=_RESOLUTION_ERRORS)
@limit_menu_reads
async def get_menu_link(
    request: Request,
    slug: str,
    service: MenuServiceDep,
    settings: SettingsDep,
    layout: MenuLayout = "categories",
) -> MenuLinkResponse:
    """Canonical public link for the restaurant (what its QR code should encode)."""
    record = await service.resolve(slug)
    base_url = settings.public_base_url or str(request.base_url)
    return MenuLinkResponse(
        restaurant_id=record.id,
        restaurant_name=record.display_name,
        layout=layout,
        url=build_menu_url(base_url, record.display_name, layout),
    )
