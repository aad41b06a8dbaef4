"""Pytest configuration and fixtures for menuhub.

Directory credentials are set before menuhub.main is imported so settings
validate. HTTP tests run against the ASGI app without its lifespan; the
menu service is replaced with one backed by in-memory fakes.
"""

import os

os.environ.setdefault("DIRECTORY_URL", "https://directory.supabase.co")
os.environ.setdefault("DIRECTORY_ANON_KEY", "test-directory-anon-key")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from menuhub.api.v1.dependencies import get_menu_service  # noqa: E402
from menuhub.application.use_cases.menu import MenuService  # noqa: E402
from menuhub.core.config import get_settings  # noqa: E402
from menuhub.core.limiter import limiter  # noqa: E402
from menuhub.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeTenantStore,
    InMemoryDirectoryStore,
    build_menu_service,
    make_record,
)

get_settings.cache_clear()


@pytest.fixture
def blue_lagoon() -> FakeTenantStore:
    """Tenant project for 'The Blue Lagoon' with a profile and nothing else."""
    return FakeTenantStore(
        tables={"restaurant_profile": [{"id": "p1", "name": "The Blue Lagoon"}]},
    )


@pytest.fixture
def directory() -> InMemoryDirectoryStore:
    return InMemoryDirectoryStore([make_record()])


@pytest.fixture
def menu_service(
    directory: InMemoryDirectoryStore, blue_lagoon: FakeTenantStore
) -> MenuService:
    return build_menu_service(directory, {blue_lagoon.endpoint: blue_lagoon})


@pytest.fixture
async def client(menu_service: MenuService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with the fake menu service."""
    app.dependency_overrides[get_menu_service] = lambda: menu_service
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
