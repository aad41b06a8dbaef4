"""Domain value objects (immutable, self-validating)."""

from menuhub.domain.value_objects.core import (
    LocalizedFieldKey,
    NameCandidateSet,
    TranslationMark,
    TranslationMetadata,
)

__all__ = [
    "LocalizedFieldKey",
    "NameCandidateSet",
    "TranslationMark",
    "TranslationMetadata",
]
