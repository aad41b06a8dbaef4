"""Domain entities: directory record and per-tenant menu rows."""

from menuhub.domain.entities.menu import (
    DEFAULT_THEME,
    AggregatedMenuView,
    Category,
    CurrencySettings,
    LanguageSettings,
    MenuItem,
    MenuItemSize,
    PopupSettings,
    RestaurantProfile,
    Theme,
    WheelReward,
)
from menuhub.domain.entities.tenant import TenantRecord

__all__ = [
    "DEFAULT_THEME",
    "AggregatedMenuView",
    "Category",
    "CurrencySettings",
    "LanguageSettings",
    "MenuItem",
    "MenuItemSize",
    "PopupSettings",
    "RestaurantProfile",
    "TenantRecord",
    "Theme",
    "WheelReward",
]
