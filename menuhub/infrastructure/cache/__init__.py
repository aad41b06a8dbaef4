"""Cache: Redis service and cache key builders.

Used by the tenant directory client to skip directory round-trips for
recently resolved menu links.
"""

from menuhub.infrastructure.cache.keys import tenant_candidates_key
from menuhub.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "tenant_candidates_key",
]
