"""Slug to display-name candidates, and display name to slug.

Public menu links carry the restaurant name as a path segment
(``/menu/the-blue-lagoon``). The directory stores display names
(``The Blue Lagoon``), so a slug is expanded into an ordered set of name
candidates that the directory client tries in turn.
"""

import re
import unicodedata
from urllib.parse import quote, unquote

from menuhub.domain.exceptions import MalformedSlug
from menuhub.domain.value_objects import NameCandidateSet

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def _decode(slug: str) -> str:
    """Percent-decode slug; bytes that are not UTF-8 make the slug malformed."""
    if "%" not in slug:
        return slug
    try:
        return unquote(slug, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedSlug(slug, "invalid percent-encoding") from e


def _validate(slug: str, decoded: str) -> None:
    if not decoded.strip():
        raise MalformedSlug(slug, "empty slug")
    if _CONTROL_RE.search(decoded):
        raise MalformedSlug(slug, "control characters")
    if "/" in decoded:
        raise MalformedSlug(slug, "path separator inside slug")
    if "*" in decoded:
        raise MalformedSlug(slug, "wildcard character")
    if not decoded.replace("-", "").strip():
        raise MalformedSlug(slug, "no name characters")


def _spaced(text: str) -> str:
    """Hyphens to spaces, whitespace runs collapsed."""
    return _WHITESPACE_RE.sub(" ", text.replace("-", " ")).strip()


def _title(text: str) -> str:
    return " ".join(word.capitalize() for word in text.split(" "))


def expand_candidates(slug: str) -> NameCandidateSet:
    """Expand a URL slug into ordered display-name candidates.

    Order: title-cased spaced name, raw slug, percent-decoded slug,
    NFC-normalized slug, spaced slug, spaced lowercase slug. Duplicates are
    dropped keeping the first occurrence, so the result is deterministic,
    non-empty and duplicate-free.

    Args:
        slug: Path segment as received (e.g. ``the-blue-lagoon``).

    Returns:
        NameCandidateSet whose first entry is the preferred display name.

    Raises:
        MalformedSlug: If the slug is not text, cannot be encoded or decoded
            as UTF-8, is empty, or contains control characters, slashes or
            the ``*`` wildcard.
    """
    if not isinstance(slug, str):
        raise MalformedSlug(str(slug), "slug must be text")
    try:
        slug.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedSlug(slug, "slug is not valid unicode") from e

    decoded = _decode(slug)
    _validate(slug, decoded)
    normalized = unicodedata.normalize("NFC", decoded)
    spaced = _spaced(normalized)

    return NameCandidateSet.from_iterable(
        [
            _title(spaced),
            slug,
            decoded,
            normalized,
            spaced,
            spaced.lower(),
        ]
    )


def slugify_name(display_name: str) -> str:
    """Build the URL slug for a display name (inverse of expand_candidates).

    Lowercases, turns whitespace runs into single hyphens and percent-encodes
    anything outside the unreserved URL characters.
    """
    collapsed = _WHITESPACE_RE.sub(" ", unicodedata.normalize("NFC", display_name)).strip()
    if not collapsed:
        raise MalformedSlug(display_name, "empty display name")
    return quote(collapsed.lower().replace(" ", "-"), safe="-._~")
