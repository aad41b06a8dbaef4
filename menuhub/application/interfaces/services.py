"""Service interfaces (ports) for external collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from menuhub.application.interfaces.repositories import ITenantDataStore
    from menuhub.domain.entities import TenantRecord


class ImageStorage(Protocol):
    """Resolves stored relative image paths to public URLs."""

    def get_public_url(self, path: str) -> str:
        """Return an absolute fetchable URL for path."""
        ...


class Translator(Protocol):
    """Third-party text translation backend."""

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Return text translated from source_lang to target_lang."""
        ...


class IConnectionCache(Protocol):
    """Owns live per-tenant data handles."""

    def get_connection(self, record: TenantRecord) -> ITenantDataStore:
        """Return the handle for record's data endpoint (identity-stable per cache policy)."""
        ...


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis)."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""
        ...
