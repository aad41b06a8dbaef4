"""Localized field selection for translatable menu entities.

Translations live in language-suffixed columns next to the base value
(``name`` / ``name_sq`` / ``name_it``). Display falls back from the suffixed
variant to the base value to an empty string.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from menuhub.core.constants import DEFAULT_SUPPORTED_LANGUAGES
from menuhub.domain.entities import LanguageSettings, MenuItemSize

LANGUAGE_OPTIONS: dict[str, str] = {
    "sq": "Shqip",
    "en": "English",
    "it": "Italiano",
    "de": "Deutsch",
    "fr": "Français",
    "zh": "中文",
}


def field_value(entity: Any, key: str) -> Any:
    """Read a column from a row model (including extras) or a plain dict row."""
    if isinstance(entity, Mapping):
        return entity.get(key)
    return getattr(entity, key, None)


def _present(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def localized_text(entity: Any, field: str, lang: str | None) -> str:
    """Return the display text of field for lang.

    Uses ``<field>_<lang>`` when present and not blank, else the base field,
    else an empty string. Works on row models and plain dict rows.
    """
    if lang:
        translated = field_value(entity, f"{field}_{lang}")
        if _present(translated):
            return translated
    base = field_value(entity, field)
    return base if isinstance(base, str) else ""


def localized_sizes(item: Any, lang: str | None) -> list[MenuItemSize]:
    """Return the size variants for lang, falling back to the base sizes.

    An empty or malformed translated list counts as absent.
    """

    def _parse(raw: Any) -> list[MenuItemSize]:
        if not raw or not isinstance(raw, list):
            return []
        try:
            return [
                s if isinstance(s, MenuItemSize) else MenuItemSize.model_validate(s)
                for s in raw
            ]
        except ValidationError:
            return []

    if lang:
        translated = _parse(field_value(item, f"sizes_{lang}"))
        if translated:
            return translated
    return _parse(field_value(item, "sizes"))


def supported_languages(settings: LanguageSettings | None) -> list[str]:
    """Languages offered in the menu language switch."""
    if settings and settings.supported_ui_languages:
        return list(settings.supported_ui_languages)
    return list(DEFAULT_SUPPORTED_LANGUAGES)


def resolve_language(
    requested: str | None,
    settings: LanguageSettings | None,
    default: str,
) -> str:
    """Pick the display language: requested if supported, else the tenant main language."""
    offered = supported_languages(settings)
    if requested and requested in offered:
        return requested
    if settings and settings.main_ui_language:
        return settings.main_ui_language
    return default
