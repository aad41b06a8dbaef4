"""API request/response schemas (pydantic)."""

from menuhub.schemas.error import ErrorResponse
from menuhub.schemas.health import HealthResponse
from menuhub.schemas.menu import MenuLinkResponse, MenuResponse, MenuSearchResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MenuLinkResponse",
    "MenuResponse",
    "MenuSearchResponse",
]
