"""Free-text search over a tenant's menu in the visitor's language."""

from collections.abc import Sequence

from menuhub.application.services.localization import localized_text
from menuhub.domain.entities import Category, MenuItem


def search_menu(
    items: Sequence[MenuItem],
    term: str,
    lang: str | None,
    categories: Sequence[Category] = (),
) -> list[MenuItem]:
    """Return items whose localized name, description or category name contains term.

    Matching is case-insensitive; a blank term returns every item. Input
    order is preserved.
    """
    needle = term.strip().lower()
    if not needle:
        return list(items)
    category_names = {
        c.id: localized_text(c, "name", lang).lower() for c in categories
    }
    return [
        item
        for item in items
        if needle in localized_text(item, "name", lang).lower()
        or needle in localized_text(item, "description", lang).lower()
        or needle in category_names.get(item.category_id or "", "")
    ]
