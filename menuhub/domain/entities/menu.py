"""Menu entities read from a tenant's hosted project.

Rows arrive loosely typed (optional columns, language-suffixed extras such as
``name_sq``, free-form JSON maps). Each entity declares the columns the menu
uses as explicit optional fields; unknown columns are kept as extras so
localized variants survive. Scalars that matter for ordering and filtering
use strict types so a string "true" or "3" is rejected, never coerced.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
)
from pydantic.alias_generators import to_camel

from menuhub.domain.enums import PopupType, ThemeMode

Number = StrictInt | StrictFloat


class RowModel(BaseModel):
    """Base for per-tenant rows: explicit optional columns, extras allowed."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class MenuItemSize(BaseModel):
    """Size variant of a menu item with its own price."""

    name: StrictStr
    price: Number


class RestaurantProfile(RowModel):
    id: StrictStr | None = None
    name: StrictStr = ""
    description: StrictStr | None = None
    address: StrictStr | None = None
    phone: StrictStr | None = None
    email: StrictStr | None = None
    logo_url: StrictStr | None = None
    banner_url: StrictStr | None = None
    social_media_links: dict[str, Any] | None = None
    working_hours: Any = None
    google_reviews_embed: StrictStr | None = None


class Category(RowModel):
    id: StrictStr
    name: StrictStr = ""
    description: StrictStr | None = None
    display_order: StrictInt | None = None
    is_active: StrictBool = True
    image_url: StrictStr | None = None
    image_path: StrictStr | None = None
    translation_metadata: dict[str, Any] | None = None


class MenuItem(RowModel):
    id: StrictStr
    category_id: StrictStr | None = None
    name: StrictStr = ""
    description: StrictStr | None = None
    price: Number = 0
    currency: StrictStr | None = None
    image_url: StrictStr | None = None
    image_path: StrictStr | None = None
    is_available: StrictBool = True
    is_featured: StrictBool = False
    allergens: list[StrictStr] = Field(default_factory=list)
    preparation_time: StrictInt | None = None
    display_order: StrictInt | None = None
    sizes: list[MenuItemSize] | None = None
    translation_metadata: dict[str, Any] | None = None


class Theme(BaseModel):
    """Public menu theme, stored as camelCase JSON in restaurant_customization."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    mode: ThemeMode = ThemeMode.LIGHT
    primary_color: StrictStr = "#1f2937"
    secondary_color: StrictStr = "#6b7280"
    accent_color: StrictStr = "#3b82f6"
    background_color: StrictStr = "#ffffff"
    card_background: StrictStr = "#ffffff"
    text_color: StrictStr = "#111827"
    muted_text_color: StrictStr = "#6b7280"
    border_color: StrictStr = "#e5e7eb"
    heading_color: StrictStr | None = None
    category_name_color: StrictStr | None = None
    item_name_color: StrictStr | None = None
    description_color: StrictStr | None = None
    price_color: StrictStr | None = None
    language_switch_background: StrictStr | None = None
    language_switch_border: StrictStr | None = None
    language_switch_text: StrictStr | None = None
    currency_switch_background: StrictStr | None = None
    currency_switch_border: StrictStr | None = None
    currency_switch_text: StrictStr | None = None
    badge_background_color: StrictStr | None = None
    badge_text_color: StrictStr | None = None
    tab_active_background: StrictStr | None = None
    tab_active_text: StrictStr | None = None
    tab_hover_background: StrictStr | None = None

    @classmethod
    def merged_over_default(cls, stored: dict[str, Any]) -> "Theme":
        """Overlay non-null stored values onto the default theme."""
        base = DEFAULT_THEME.model_dump(by_alias=True)
        base.update({k: v for k, v in stored.items() if v is not None})
        return cls.model_validate(base)


DEFAULT_THEME = Theme()


class LanguageSettings(RowModel):
    id: StrictStr | None = None
    main_ui_language: StrictStr | None = None
    supported_ui_languages: list[StrictStr] = Field(default_factory=list)
    content_languages: list[StrictStr] = Field(default_factory=list)
    auto_translate: StrictBool = False


class CurrencySettings(RowModel):
    id: StrictStr | None = None
    default_currency: StrictStr | None = None
    enabled_currencies: list[StrictStr] = Field(default_factory=list)
    exchange_rates: dict[str, Number] = Field(default_factory=dict)


class WheelReward(BaseModel):
    text: StrictStr
    chance: Number = 0
    color: StrictStr | None = None


class PopupSettings(RowModel):
    enabled: StrictBool = False
    type: PopupType = PopupType.CTA
    title: StrictStr = ""
    description: StrictStr = ""
    link: StrictStr | None = None
    button_text: StrictStr = ""
    wheel_enabled: StrictBool = False
    wheel_unlock_text: StrictStr | None = None
    wheel_unlock_button_text: StrictStr | None = None
    wheel_rewards: list[WheelReward] = Field(default_factory=list)


class AggregatedMenuView(BaseModel):
    """Everything the public menu needs for one tenant, after one aggregation pass.

    ``categories`` and ``items`` are always lists and ``theme`` is always set;
    the remaining fields are absent when the tenant has not configured them.
    ``degraded_fields`` lists fields that fell back because their fetch failed.
    """

    profile: RestaurantProfile | None = None
    categories: list[Category] = Field(default_factory=list)
    items: list[MenuItem] = Field(default_factory=list)
    theme: Theme = Field(default_factory=lambda: DEFAULT_THEME.model_copy())
    language_settings: LanguageSettings | None = None
    currency_settings: CurrencySettings | None = None
    popup_settings: PopupSettings | None = None
    degraded_fields: list[str] = Field(default_factory=list)
