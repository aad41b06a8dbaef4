"""Domain value objects for the menuhub application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

from menuhub.domain.enums import TranslationStatus
from menuhub.domain.exceptions import ValidationException
from menuhub.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class NameCandidateSet:
    """Ordered, non-empty, duplicate-free display-name candidates for one slug.

    Order matters: the directory tries exact matches in this order and uses
    the first candidate as the partial-match pattern.
    """

    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ValueError("Name candidate set must not be empty")
        if len(set(self.values)) != len(self.values):
            raise ValueError("Name candidates must be unique")
        if any(not v for v in self.values):
            raise ValueError("Name candidates must be non-empty strings")

    @classmethod
    def from_iterable(cls, candidates) -> "NameCandidateSet":
        """Build a set from any iterable, dropping empty and repeated values."""
        seen: dict[str, None] = {}
        for candidate in candidates:
            if candidate and candidate not in seen:
                seen[candidate] = None
        return cls(tuple(seen))

    @property
    def first(self) -> str:
        """The highest-priority candidate (also the partial-match pattern)."""
        return self.values[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, item: object) -> bool:
        return item in self.values


# field_lang, e.g. name_sq, description_zh
_FIELD_KEY_RE = re.compile(r"^(?P<field>[a-z][a-z0-9]*)_(?P<lang>[a-z]{2})$")


@dataclass(frozen=True)
class LocalizedFieldKey:
    """Key of a language-suffixed column (e.g. ``name_sq``).

    Parsing is strict so ``name-sq`` or ``Name_SQ`` never silently create a
    second, unrelated metadata entry.
    """

    field: str
    lang: str

    def __post_init__(self) -> None:
        if not re.fullmatch(r"[a-z][a-z0-9]*", self.field or ""):
            raise ValidationException(
                f"Invalid translatable field name: {self.field!r}", field="field"
            )
        if not re.fullmatch(r"[a-z]{2}", self.lang or ""):
            raise ValidationException(
                f"Invalid language code: {self.lang!r}", field="lang"
            )

    @classmethod
    def parse(cls, key: str) -> "LocalizedFieldKey":
        """Parse ``<field>_<lang>``; raise ValidationException otherwise."""
        match = _FIELD_KEY_RE.fullmatch(key or "")
        if not match:
            raise ValidationException(
                f"Malformed localized field key: {key!r} (expected e.g. 'name_sq')",
                field="translation_metadata",
            )
        return cls(match.group("field"), match.group("lang"))

    def __str__(self) -> str:
        return f"{self.field}_{self.lang}"


@dataclass(frozen=True)
class TranslationMark:
    """Provenance of one translated value: status, when, and which source."""

    status: TranslationStatus
    timestamp: datetime
    source: str

    def to_dict(self) -> dict[str, str]:
        return {
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TranslationMark":
        try:
            status = TranslationStatus(data["status"])
            timestamp = ensure_utc(
                datetime.fromisoformat(str(data["timestamp"]).replace("Z", "+00:00"))
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ValidationException(
                f"Invalid translation metadata entry: {data!r}",
                field="translation_metadata",
            ) from e
        return cls(status=status, timestamp=timestamp, source=str(data.get("source", "")))


class TranslationMetadata:
    """Typed map from localized field key to its provenance mark.

    Serializes to the free-form JSON column ``translation_metadata`` with
    canonical keys such as ``name_sq``.
    """

    def __init__(self, marks: dict[LocalizedFieldKey, TranslationMark] | None = None) -> None:
        self._marks: dict[LocalizedFieldKey, TranslationMark] = dict(marks or {})

    @classmethod
    def from_json(cls, raw: dict | None) -> "TranslationMetadata":
        """Parse the stored column. Malformed keys or entries raise ValidationException."""
        if not raw:
            return cls()
        if not isinstance(raw, dict):
            raise ValidationException(
                "translation_metadata must be an object", field="translation_metadata"
            )
        return cls(
            {LocalizedFieldKey.parse(k): TranslationMark.from_dict(v) for k, v in raw.items()}
        )

    def to_json(self) -> dict[str, dict[str, str]]:
        return {str(k): mark.to_dict() for k, mark in self._marks.items()}

    def mark(self, key: LocalizedFieldKey, mark: TranslationMark) -> None:
        self._marks[key] = mark

    def get(self, key: LocalizedFieldKey) -> TranslationMark | None:
        return self._marks.get(key)

    def status_of(self, key: LocalizedFieldKey) -> TranslationStatus | None:
        mark = self._marks.get(key)
        return mark.status if mark else None

    def __len__(self) -> int:
        return len(self._marks)

    def __contains__(self, key: object) -> bool:
        return key in self._marks
