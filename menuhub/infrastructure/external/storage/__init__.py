"""Storage: public image URLs in tenant Supabase buckets.

Implementations satisfy menuhub.application.interfaces.ImageStorage.
"""

from menuhub.infrastructure.external.storage.factory import ImageStorageFactory
from menuhub.infrastructure.external.storage.supabase_storage import SupabaseImageStorage

__all__ = [
    "ImageStorageFactory",
    "SupabaseImageStorage",
]
