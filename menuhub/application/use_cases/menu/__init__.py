"""Menu use cases: aggregation, slug-to-menu pipeline, navigation guard."""

from menuhub.application.use_cases.menu.load_menu_view import TenantDataAggregator
from menuhub.application.use_cases.menu.menu_session import MenuSession
from menuhub.application.use_cases.menu.open_menu import MenuService

__all__ = ["MenuService", "MenuSession", "TenantDataAggregator"]
