"""Settings validation and application lifespan wiring."""

import httpx
import pytest
from fastapi import FastAPI

from menuhub.core.config import Settings, get_settings
from menuhub.core.exception_handlers import status_for
from menuhub.core.lifespan import create_lifespan
from menuhub.domain.exceptions import (
    ConnectionUnavailable,
    MalformedSlug,
    MenuhubException,
    TenantNotFound,
    TranslationFailed,
)
from menuhub.infrastructure.external.storage import ImageStorageFactory
from menuhub.infrastructure.supabase import SingleSlotConnectionCache


def _settings(**overrides) -> Settings:
    values = {
        "directory_url": "https://dir.supabase.co",
        "directory_anon_key": "key",
        **overrides,
    }
    return Settings(_env_file=None, **values)


class TestSettings:
    def test_defaults(self) -> None:
        settings = _settings()
        assert settings.connection_cache_mode == "single"
        assert settings.default_language == "sq"
        assert settings.default_currency == "ALL"
        assert settings.currency_strict_rates is False

    @pytest.mark.parametrize(
        "overrides",
        [
            {"directory_url": ""},
            {"directory_anon_key": ""},
            {"connection_cache_mode": "pooled"},
            {"connection_cache_max_size": 0},
            {"directory_retry_attempts": 0},
            {"telemetry_exporter": "jaeger"},
        ],
    )
    def test_invalid_settings_rejected(self, overrides) -> None:
        with pytest.raises(ValueError):
            _settings(**overrides)

    def test_secret_key_not_in_repr(self) -> None:
        assert "super-secret" not in repr(_settings(directory_anon_key="super-secret"))


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (MalformedSlug("x", "empty slug"), 400),
        (TenantNotFound(["X"]), 404),
        (ConnectionUnavailable("https://x"), 503),
        (TranslationFailed("sq", "down"), 502),
        (MenuhubException("other"), 500),
    ],
)
def test_status_mapping(exc, status) -> None:
    assert status_for(exc) == status


async def test_lifespan_builds_and_releases_shared_resources() -> None:
    app = FastAPI()
    async with create_lifespan(app):
        client = app.state.http_client
        assert isinstance(client, httpx.AsyncClient)
        assert isinstance(app.state.connection_cache, SingleSlotConnectionCache)
        assert isinstance(app.state.image_storage_factory, ImageStorageFactory)
        assert app.state.cache is None
    assert client.is_closed
    assert app.state.http_client is None
    assert get_settings().redis_enabled is False
