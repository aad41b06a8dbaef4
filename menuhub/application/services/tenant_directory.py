"""Tenant resolution against the central restaurant directory.

Exact-name attempts run first, one per candidate in order. Only when every
exact attempt misses is a single case-insensitive partial lookup made, on
the first (title-cased) candidate. A partial lookup that matches more than
one restaurant is treated as not found.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from menuhub.application.interfaces import CacheProtocol, IDirectoryStore
from menuhub.domain.entities import TenantRecord
from menuhub.domain.exceptions import DirectoryUnavailable, TenantNotFound
from menuhub.domain.value_objects import NameCandidateSet
from menuhub.infrastructure.cache.keys import tenant_candidates_key
from menuhub.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TenantDirectoryClient:
    """Resolves name candidates to a directory record.

    Transient directory failures (DirectoryUnavailable) are retried with
    exponential backoff; the last failure is re-raised once attempts are
    exhausted. TenantNotFound is never retried.
    """

    def __init__(
        self,
        store: IDirectoryStore,
        cache: CacheProtocol | None = None,
        cache_ttl: int = 900,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.2,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        self.store = store
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.retry_attempts = retry_attempts
        self.retry_backoff_seconds = retry_backoff_seconds
        self._sleep = sleep

    async def _with_retry(self, call: Callable[[], Awaitable[T]]) -> T:
        for attempt in range(1, self.retry_attempts + 1):
            try:
                return await call()
            except DirectoryUnavailable:
                if attempt == self.retry_attempts:
                    raise
                delay = self.retry_backoff_seconds * (2 ** (attempt - 1))
                logger.warning(
                    "Directory unavailable (attempt %s/%s); retrying in %.2fs",
                    attempt,
                    self.retry_attempts,
                    delay,
                )
                add_span_event("directory.retry", {"attempt": attempt, "delay_s": delay})
                await self._sleep(delay)
        raise AssertionError("unreachable")

    async def _cached(self, candidates: NameCandidateSet) -> TenantRecord | None:
        if self.cache is None or not self.cache.is_available():
            return None
        data = await self.cache.get(tenant_candidates_key(candidates))
        if not data:
            return None
        try:
            return TenantRecord.from_cache(data)
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed cached directory record")
            return None

    async def _remember(self, candidates: NameCandidateSet, record: TenantRecord) -> None:
        if self.cache is not None and self.cache.is_available():
            await self.cache.set(
                tenant_candidates_key(candidates), record.to_cache(), ttl=self.cache_ttl
            )

    @traced("tenant_directory.resolve_tenant")
    async def resolve_tenant(self, candidates: NameCandidateSet) -> TenantRecord:
        """Return the directory record for the first matching candidate.

        Args:
            candidates: Ordered name candidates from the name normalizer.

        Returns:
            The matching TenantRecord.

        Raises:
            TenantNotFound: No exact hit and the partial lookup found zero or
                several restaurants. Carries every attempted candidate.
            DirectoryUnavailable: The directory stayed unreachable after retries.
        """
        cached = await self._cached(candidates)
        if cached is not None:
            add_span_attributes(**{"tenant.id": cached.id, "tenant.match": "cache"})
            return cached

        for candidate in candidates:
            record = await self._with_retry(
                lambda c=candidate: self.store.find_by_exact_name(c)
            )
            if record is not None:
                logger.debug("Resolved tenant %s by exact name", record.id)
                add_span_attributes(**{"tenant.id": record.id, "tenant.match": "exact"})
                await self._remember(candidates, record)
                return record

        matches = await self._with_retry(
            lambda: self.store.find_by_partial_name(candidates.first)
        )
        if len(matches) == 1:
            record = matches[0]
            logger.debug("Resolved tenant %s by partial name", record.id)
            add_span_attributes(**{"tenant.id": record.id, "tenant.match": "partial"})
            await self._remember(candidates, record)
            return record

        if matches:
            logger.info(
                "Ambiguous partial match for %r (%s restaurants)",
                candidates.first,
                len(matches),
            )
        raise TenantNotFound(list(candidates), partial_matches=len(matches))
