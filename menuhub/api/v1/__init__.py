"""API v1: public menu and health routes."""

from menuhub.api.v1.router import api_router

__all__ = ["api_router"]
