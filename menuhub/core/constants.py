"""Core constants: cache key prefixes, logical table names, and menu tables.

Single source of truth for the per-tenant table names (the hosted projects
have no schema in code) and for cache key structure.
"""

# Cache key prefixes
CACHE_PREFIX_TENANT = "tenant"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Per-tenant logical tables
TABLE_RESTAURANT_PROFILE = "restaurant_profile"
TABLE_CATEGORIES = "categories"
TABLE_MENU_ITEMS = "menu_items"
TABLE_RESTAURANT_CUSTOMIZATION = "restaurant_customization"
TABLE_LANGUAGE_SETTINGS = "language_settings"
TABLE_CURRENCY_SETTINGS = "currency_settings"
TABLE_POPUP_SETTINGS = "popup_settings"

# Translatable fields on categories and menu items
TRANSLATABLE_FIELDS = ("name", "description")

# Fallbacks when a tenant has no language/currency settings row
DEFAULT_SUPPORTED_LANGUAGES = ("sq", "en")
DEFAULT_ENABLED_CURRENCIES = ("ALL", "EUR")
