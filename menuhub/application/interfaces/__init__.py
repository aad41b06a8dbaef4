"""Application ports (repository and service protocols)."""

from menuhub.application.interfaces.repositories import IDirectoryStore, ITenantDataStore
from menuhub.application.interfaces.services import (
    CacheProtocol,
    IConnectionCache,
    ImageStorage,
    Translator,
)

__all__ = [
    "CacheProtocol",
    "IConnectionCache",
    "IDirectoryStore",
    "ITenantDataStore",
    "ImageStorage",
    "Translator",
]
