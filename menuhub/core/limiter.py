"""Rate limiter instance for SlowAPI.

Shared so main (app.state.limiter) and route modules use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from menuhub.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _menu_rate_limit() -> str:
    return get_settings().menu_rate_limit


# Public menu reads (menu, search, link)
limit_menu_reads = limiter.limit(_menu_rate_limit)
