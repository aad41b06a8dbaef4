"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
their services from menuhub.api.v1.dependencies.
"""

from fastapi import APIRouter

from menuhub.api.v1.endpoints import health, menus

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(menus.router, prefix="/menus", tags=["menus"])
