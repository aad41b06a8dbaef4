"""Service settings read from the environment (and an optional .env file).

Only the directory project coordinates (DIRECTORY_URL, DIRECTORY_ANON_KEY)
are mandatory; everything else has a working default.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONNECTION_CACHE_MODES = ("single", "keyed")
TELEMETRY_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Environment variable names are the field names, case-insensitive."""

    # App
    app_name: str = "menuhub"
    app_version: str = "1.0.0"
    debug: bool = False

    # Central directory (hosted project holding the restaurants table)
    directory_url: str = ""
    directory_anon_key: SecretStr = SecretStr("")
    directory_table: str = "restaurants"
    directory_retry_attempts: int = 3
    directory_retry_backoff_seconds: float = 0.2

    # Per-tenant data access
    http_timeout_seconds: float = 10.0
    # "single": one global connection slot (one tenant per session);
    # "keyed": endpoint-keyed LRU for serving many tenants from one process.
    connection_cache_mode: str = "single"
    connection_cache_max_size: int = 64
    storage_bucket: str = "menu-images"

    # Menu presentation defaults
    default_language: str = "sq"
    default_currency: str = "ALL"
    # Missing exchange rates: False keeps parity (rate 1), True raises.
    currency_strict_rates: bool = False
    # Base URL of the public menu front end, used for QR links; request URL when unset.
    public_base_url: str | None = None

    # Translation backends (admin tooling)
    translation_primary_url: str = "https://libretranslate.de/translate"
    translation_fallback_url: str = "https://api.mymemory.translated.net/get"

    # CORS / request
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"
    request_id_header: str = "X-Request-ID"
    menu_rate_limit: str = "120/minute"

    # Redis Cache
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_tenants: int = 900

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate directory credentials and constrained choices."""
        if not self.directory_url:
            raise ValueError(
                "DIRECTORY_URL is required (base URL of the central directory project). "
                "Set in environment or .env file."
            )
        if not self.directory_anon_key.get_secret_value():
            raise ValueError(
                "DIRECTORY_ANON_KEY is required (public API key of the directory project)."
            )
        if self.connection_cache_mode not in CONNECTION_CACHE_MODES:
            raise ValueError(
                f"connection_cache_mode must be one of {CONNECTION_CACHE_MODES}, "
                f"got: {self.connection_cache_mode!r}"
            )
        if self.connection_cache_max_size < 1:
            raise ValueError("connection_cache_max_size must be at least 1")
        if self.directory_retry_attempts < 1:
            raise ValueError("directory_retry_attempts must be at least 1")
        if self.telemetry_exporter not in TELEMETRY_EXPORTERS:
            raise ValueError(
                f"telemetry_exporter must be one of {TELEMETRY_EXPORTERS}, "
                f"got: {self.telemetry_exporter!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings, built and validated on first use.

    Tests that change environment variables call get_settings.cache_clear().
    """
    return Settings()
