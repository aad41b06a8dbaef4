"""Cache key builders. Single place for key format.

Restaurant names are free text (may contain the separator, spaces, any
script), so name-based keys use a digest instead of the raw value.
"""

import hashlib
from collections.abc import Iterable

from menuhub.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_TENANT

# Unit separator; never produced by the name normalizer (control characters are rejected).
_CANDIDATE_SEP = "\x1f"


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:32]


def tenant_candidates_key(candidates: Iterable[str]) -> str:
    """Cache key for the directory record resolved from an ordered candidate list.

    Two slugs share an entry only when they expand to exactly the same
    candidates in the same order, since the exact lookups could otherwise
    pick different restaurants.
    """
    joined = _CANDIDATE_SEP.join(candidates)
    return f"{CACHE_PREFIX_TENANT}{CACHE_KEY_SEP}names{CACHE_KEY_SEP}{_digest(joined)}"
