"""Application use cases: one entry point per workflow."""

from menuhub.application.use_cases.menu import MenuService, MenuSession, TenantDataAggregator
from menuhub.application.use_cases.translation import AutoTranslateService

__all__ = [
    "AutoTranslateService",
    "MenuService",
    "MenuSession",
    "TenantDataAggregator",
]
