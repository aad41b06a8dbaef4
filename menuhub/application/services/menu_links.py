"""Public menu links (the URL encoded into a restaurant's QR code)."""

from urllib.parse import urlencode

from menuhub.application.services.name_normalizer import slugify_name

MENU_LAYOUTS = ("categories", "all-items")


def build_menu_url(base_url: str, display_name: str, layout: str = "categories") -> str:
    """Return ``<base>/menu/<slug>``, with ``?layout=`` for non-default layouts.

    Raises:
        ValueError: If layout is not a known layout.
    """
    if layout not in MENU_LAYOUTS:
        raise ValueError(f"Unknown menu layout: {layout!r}")
    url = f"{base_url.rstrip('/')}/menu/{slugify_name(display_name)}"
    if layout != "categories":
        url = f"{url}?{urlencode({'layout': layout})}"
    return url
