"""Domain enumerations for the menuhub application.

Enums represent fixed sets of domain values (translation provenance,
popup kinds, theme mode, entity kinds).
"""

from enum import Enum


class TranslationStatus(str, Enum):
    """Provenance of a translated field value."""

    AUTO_TRANSLATED = "auto_translated"
    MANUALLY_EDITED = "manually_edited"
    APPROVED = "approved"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class PopupType(str, Enum):
    """Popup shown when a menu opens: call-to-action or reward wheel."""

    CTA = "cta"
    WHEEL = "wheel"


class ThemeMode(str, Enum):
    """Base color scheme of the public menu."""

    LIGHT = "light"
    DARK = "dark"


class TranslatableKind(str, Enum):
    """Entity kinds carrying translatable fields, mapped to their tables."""

    CATEGORY = "category"
    MENU_ITEM = "menu_item"

    @property
    def table(self) -> str:
        """Per-tenant table holding rows of this kind."""
        return "categories" if self is TranslatableKind.CATEGORY else "menu_items"
