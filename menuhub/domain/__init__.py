"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from menuhub.domain.entities import AggregatedMenuView, TenantRecord, Theme
from menuhub.domain.enums import TranslationStatus
from menuhub.domain.exceptions import (
    ConnectionUnavailable,
    MalformedSlug,
    MenuhubException,
    TenantNotFound,
    ValidationException,
)
from menuhub.domain.value_objects import NameCandidateSet, TranslationMetadata

__all__ = [
    # Entities
    "AggregatedMenuView",
    "TenantRecord",
    "Theme",
    # Enums
    "TranslationStatus",
    # Exceptions
    "ConnectionUnavailable",
    "MalformedSlug",
    "MenuhubException",
    "TenantNotFound",
    "ValidationException",
    # Value objects
    "NameCandidateSet",
    "TranslationMetadata",
]
