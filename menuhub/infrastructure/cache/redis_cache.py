"""Redis-based cache for resolved directory records.

Optional: when Redis is disabled or unreachable every call degrades to a
miss, and the directory is queried directly. Values are JSON.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from menuhub.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNREACHABLE = (redis.ConnectionError, redis.TimeoutError)


class CacheService:
    """JSON values in Redis under keys from menuhub.infrastructure.cache.keys.

    connect() at startup, disconnect() at shutdown. A client passed in
    directly is used as-is and never pinged.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = redis_client

    def _build_client(self) -> redis.Redis:
        secret = self.settings.redis_password
        return redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=secret.get_secret_value() if secret else None,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        """Ping a fresh client; if Redis does not answer, caching stays off."""
        if self._client is not None:
            return
        client = self._build_client()
        try:
            await client.ping()
        except _UNREACHABLE as e:
            await client.aclose()
            logger.warning(
                "Redis at %s:%s unreachable (%s); tenant lookups go to the directory",
                self.settings.redis_host,
                self.settings.redis_port,
                e,
            )
            return
        self._client = client
        logger.info("Tenant cache on Redis %s:%s", self.settings.redis_host, self.settings.redis_port)

    async def disconnect(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()
            logger.info("Tenant cache closed")

    def is_available(self) -> bool:
        return self._client is not None

    async def _call(
        self,
        action: str,
        key: str,
        command: Callable[[redis.Redis], Awaitable[T]],
        fallback: T,
    ) -> T:
        """Run one Redis command; any Redis failure returns ``fallback``."""
        client = self._client
        if client is None:
            return fallback
        try:
            return await command(client)
        except _UNREACHABLE as e:
            logger.warning("Redis %s %s skipped: %s", action, key, e)
        except redis.RedisError:
            logger.exception("Redis %s %s failed", action, key)
        return fallback

    async def get(self, key: str) -> Any | None:
        """Decoded value for ``key``; None on miss, failure or unreadable JSON."""
        raw = await self._call("GET", key, lambda c: c.get(key), None)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring non-JSON cache entry %s", key)
            return None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        payload = json.dumps(value)

        async def _setex(client: redis.Redis) -> bool:
            await client.setex(key, ttl, payload)
            return True

        return await self._call("SETEX", key, _setex, False)

    async def delete(self, key: str) -> bool:
        async def _delete(client: redis.Redis) -> bool:
            await client.delete(key)
            return True

        return await self._call("DEL", key, _delete, False)
