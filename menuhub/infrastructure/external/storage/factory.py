"""Image storage factory: one storage view per tenant data endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from menuhub.infrastructure.external.storage.supabase_storage import SupabaseImageStorage

if TYPE_CHECKING:
    from menuhub.core.config import Settings


class ImageStorageFactory:
    """Creates SupabaseImageStorage for a tenant endpoint using the configured bucket."""

    def __init__(self, settings: "Settings | None" = None) -> None:
        from menuhub.core.config import get_settings

        self.bucket = (settings or get_settings()).storage_bucket

    def __call__(self, endpoint: str) -> SupabaseImageStorage:
        return SupabaseImageStorage(endpoint, self.bucket)
