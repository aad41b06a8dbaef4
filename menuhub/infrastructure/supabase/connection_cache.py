"""Connection caches: who owns live tenant handles and for how long.

SingleSlotConnectionCache keeps exactly one handle, for the tenant the
last request resolved to; switching endpoints discards the previous
handle. KeyedConnectionCache keeps up to max_size handles in LRU order for
processes serving many tenants at once. Handles share one httpx client,
so discarding a handle needs no close step.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from functools import partial

import httpx

from menuhub.domain.entities import TenantRecord
from menuhub.infrastructure.supabase.connection import TenantConnection

logger = logging.getLogger(__name__)

ConnectionFactory = Callable[[TenantRecord], TenantConnection]


class SingleSlotConnectionCache:
    """One global slot keyed by data endpoint.

    Same endpoint returns the identical handle. A different endpoint
    replaces the slot, so e1, e2, e1 yields a fresh handle on the second e1.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        factory: ConnectionFactory | None = None,
    ) -> None:
        if factory is None:
            if http_client is None:
                raise ValueError("Provide http_client or factory")
            factory = partial(TenantConnection, http_client=http_client)
        self._factory = factory
        self._lock = threading.Lock()
        self._endpoint: str | None = None
        self._connection: TenantConnection | None = None

    def get_connection(self, record: TenantRecord) -> TenantConnection:
        with self._lock:
            if self._connection is not None and self._endpoint == record.data_endpoint:
                return self._connection
            if self._endpoint is not None:
                logger.debug(
                    "Replacing cached connection %s -> %s", self._endpoint, record.data_endpoint
                )
            self._connection = self._factory(record)
            self._endpoint = record.data_endpoint
            return self._connection

    def clear(self) -> None:
        with self._lock:
            self._connection = None
            self._endpoint = None


class KeyedConnectionCache:
    """Endpoint-keyed LRU of handles, bounded to max_size entries."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        max_size: int = 64,
        factory: ConnectionFactory | None = None,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if factory is None:
            if http_client is None:
                raise ValueError("Provide http_client or factory")
            factory = partial(TenantConnection, http_client=http_client)
        self._factory = factory
        self.max_size = max_size
        self._lock = threading.Lock()
        self._connections: OrderedDict[str, TenantConnection] = OrderedDict()

    def get_connection(self, record: TenantRecord) -> TenantConnection:
        endpoint = record.data_endpoint
        with self._lock:
            connection = self._connections.get(endpoint)
            if connection is not None:
                self._connections.move_to_end(endpoint)
                return connection
            connection = self._factory(record)
            self._connections[endpoint] = connection
            if len(self._connections) > self.max_size:
                evicted, _ = self._connections.popitem(last=False)
                logger.debug("Evicted cached connection %s", evicted)
            return connection

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def clear(self) -> None:
        with self._lock:
            self._connections.clear()


def build_connection_cache(
    mode: str,
    http_client: httpx.AsyncClient,
    max_size: int = 64,
) -> SingleSlotConnectionCache | KeyedConnectionCache:
    """Return the cache for a configured mode ("single" or "keyed")."""
    if mode == "single":
        return SingleSlotConnectionCache(http_client)
    if mode == "keyed":
        return KeyedConnectionCache(http_client, max_size=max_size)
    raise ValueError(f"Unknown connection cache mode: {mode!r}")
