"""Application services: slug normalization, tenant resolution, menu presentation helpers."""

from menuhub.application.services.localization import (
    LANGUAGE_OPTIONS,
    localized_sizes,
    localized_text,
    resolve_language,
    supported_languages,
)
from menuhub.application.services.menu_links import build_menu_url
from menuhub.application.services.menu_search import search_menu
from menuhub.application.services.name_normalizer import expand_candidates, slugify_name
from menuhub.application.services.popup_wheel import pick_wheel_reward
from menuhub.application.services.pricing import (
    CURRENCY_OPTIONS,
    convert_price,
    enabled_currencies,
    format_price,
)
from menuhub.application.services.tenant_directory import TenantDirectoryClient

__all__ = [
    "CURRENCY_OPTIONS",
    "LANGUAGE_OPTIONS",
    "TenantDirectoryClient",
    "build_menu_url",
    "convert_price",
    "enabled_currencies",
    "expand_candidates",
    "format_price",
    "localized_sizes",
    "localized_text",
    "pick_wheel_reward",
    "resolve_language",
    "search_menu",
    "slugify_name",
    "supported_languages",
]
