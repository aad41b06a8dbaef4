"""Public menu API schemas.

Responses carry display-ready values: names and descriptions already
localized for the chosen language, prices already converted and
formatted for the chosen currency. The tenant's access key never
appears in any response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, Field

from menuhub.application.services.localization import (
    LANGUAGE_OPTIONS,
    localized_sizes,
    localized_text,
)
from menuhub.application.services.pricing import (
    CURRENCY_OPTIONS,
    convert_price,
    format_price,
)
from menuhub.domain.entities import (
    AggregatedMenuView,
    Category,
    MenuItem,
    PopupSettings,
    RestaurantProfile,
    TenantRecord,
    Theme,
)
from menuhub.domain.enums import PopupType
from menuhub.domain.exceptions import ExchangeRateMissing, InvalidExchangeRate

logger = logging.getLogger(__name__)

# Reported in degraded_fields when stored exchange rates cannot be used.
CURRENCY_SETTINGS_FIELD = "currency_settings"

MenuLayout = Literal["categories", "all-items"]


class LanguageOption(BaseModel):
    code: str
    name: str


class CurrencyOption(BaseModel):
    code: str
    name: str
    symbol: str


class RestaurantOut(BaseModel):
    """Restaurant header block."""

    id: str
    name: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    social_media_links: dict[str, Any] | None = None
    working_hours: Any = None
    google_reviews_embed: str | None = None


class CategoryOut(BaseModel):
    id: str
    name: str
    description: str
    image_url: str | None = None
    display_order: int | None = None


class SizeOut(BaseModel):
    name: str
    price: float
    formatted_price: str


class MenuItemOut(BaseModel):
    id: str
    category_id: str | None = None
    name: str
    description: str
    price: float = Field(..., description="Price in the response currency, rounded to cents")
    formatted_price: str
    currency: str
    image_url: str | None = None
    is_featured: bool = False
    allergens: list[str] = Field(default_factory=list)
    preparation_time: int | None = None
    sizes: list[SizeOut] = Field(default_factory=list)


class WheelRewardOut(BaseModel):
    text: str
    chance: float
    color: str | None = None


class PopupOut(BaseModel):
    type: PopupType
    title: str
    description: str
    link: str | None = None
    button_text: str
    wheel_enabled: bool = False
    wheel_unlock_text: str | None = None
    wheel_unlock_button_text: str | None = None
    wheel_rewards: list[WheelRewardOut] = Field(default_factory=list)

    @classmethod
    def from_settings(cls, popup: PopupSettings) -> PopupOut:
        return cls(
            type=popup.type,
            title=popup.title,
            description=popup.description,
            link=popup.link,
            button_text=popup.button_text,
            wheel_enabled=popup.wheel_enabled,
            wheel_unlock_text=popup.wheel_unlock_text,
            wheel_unlock_button_text=popup.wheel_unlock_button_text,
            wheel_rewards=[
                WheelRewardOut(text=r.text, chance=float(r.chance), color=r.color)
                for r in popup.wheel_rewards
            ],
        )


class MenuResponse(BaseModel):
    """GET /menus/{slug}."""

    restaurant: RestaurantOut
    language: str
    languages: list[LanguageOption]
    currency: str
    currencies: list[CurrencyOption]
    theme: Theme
    categories: list[CategoryOut]
    items: list[MenuItemOut]
    popup: PopupOut | None = None
    degraded_fields: list[str] = Field(default_factory=list)


class MenuSearchResponse(BaseModel):
    """GET /menus/{slug}/search."""

    query: str
    language: str
    currency: str
    items: list[MenuItemOut]
    degraded_fields: list[str] = Field(default_factory=list)


class MenuLinkResponse(BaseModel):
    """GET /menus/{slug}/link: canonical public link for QR codes."""

    restaurant_id: str
    restaurant_name: str
    layout: MenuLayout
    url: str


@dataclass
class MenuPresenter:
    """Renders domain rows for one language and currency.

    A price whose stored exchange rates are unusable is shown unconverted in
    its own currency, and ``currency_settings`` is added to ``degraded``.
    """

    language: str
    currency: str
    base_currency: str
    rates: dict[str, float] = field(default_factory=dict)
    strict_rates: bool = False
    degraded: list[str] = field(default_factory=list)

    def can_convert(self, source_currency: str, target_currency: str) -> bool:
        try:
            convert_price(
                1.0, source_currency, target_currency, self.rates, strict=self.strict_rates
            )
        except (ExchangeRateMissing, InvalidExchangeRate) as e:
            logger.warning(
                "Cannot convert %s to %s: %s", source_currency, target_currency, e.error_code
            )
            self.mark_currency_degraded()
            return False
        return True

    def mark_currency_degraded(self) -> None:
        if CURRENCY_SETTINGS_FIELD not in self.degraded:
            self.degraded.append(CURRENCY_SETTINGS_FIELD)

    def degraded_fields(self, view: AggregatedMenuView) -> list[str]:
        return view.degraded_fields + [f for f in self.degraded if f not in view.degraded_fields]

    def _price(self, amount: float, source_currency: str | None) -> tuple[float, str, str]:
        """(amount, formatted, currency) for display."""
        source = source_currency or self.base_currency
        currency = self.currency if self.can_convert(source, self.currency) else source
        converted = convert_price(amount, source, currency, self.rates, strict=self.strict_rates)
        rounded = round(converted, 2)
        return rounded, format_price(rounded, currency), currency

    def restaurant(self, record: TenantRecord, profile: RestaurantProfile | None) -> RestaurantOut:
        if profile is None:
            return RestaurantOut(id=record.id, name=record.display_name)
        return RestaurantOut(
            id=record.id,
            name=localized_text(profile, "name", self.language) or record.display_name,
            description=localized_text(profile, "description", self.language) or None,
            address=profile.address,
            phone=profile.phone,
            email=profile.email,
            logo_url=profile.logo_url,
            banner_url=profile.banner_url,
            social_media_links=profile.social_media_links,
            working_hours=profile.working_hours,
            google_reviews_embed=profile.google_reviews_embed,
        )

    def category(self, category: Category) -> CategoryOut:
        return CategoryOut(
            id=category.id,
            name=localized_text(category, "name", self.language),
            description=localized_text(category, "description", self.language),
            image_url=category.image_url,
            display_order=category.display_order,
        )

    def item(self, item: MenuItem) -> MenuItemOut:
        price, formatted, currency = self._price(item.price, item.currency)
        sizes = []
        for size in localized_sizes(item, self.language):
            size_price, size_formatted, _ = self._price(size.price, item.currency)
            sizes.append(SizeOut(name=size.name, price=size_price, formatted_price=size_formatted))
        return MenuItemOut(
            id=item.id,
            category_id=item.category_id,
            name=localized_text(item, "name", self.language),
            description=localized_text(item, "description", self.language),
            price=price,
            formatted_price=formatted,
            currency=currency,
            image_url=item.image_url,
            is_featured=item.is_featured,
            allergens=item.allergens,
            preparation_time=item.preparation_time,
            sizes=sizes,
        )

    def menu(
        self,
        record: TenantRecord,
        view: AggregatedMenuView,
        languages: list[str],
        currencies: list[str],
    ) -> MenuResponse:
        popup = view.popup_settings
        return MenuResponse(
            restaurant=self.restaurant(record, view.profile),
            language=self.language,
            languages=[
                LanguageOption(code=code, name=LANGUAGE_OPTIONS.get(code, code))
                for code in languages
            ],
            currency=self.currency,
            currencies=[
                CurrencyOption(code=code, name=CURRENCY_OPTIONS[code][0], symbol=CURRENCY_OPTIONS[code][1])
                for code in currencies
                if code in CURRENCY_OPTIONS
            ],
            theme=view.theme,
            categories=[self.category(c) for c in view.categories],
            items=[self.item(i) for i in view.items],
            popup=PopupOut.from_settings(popup) if popup and popup.enabled else None,
            degraded_fields=self.degraded_fields(view),
        )
