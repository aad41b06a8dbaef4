"""Supabase (PostgREST) access: directory store, tenant connections, connection caches."""

from menuhub.infrastructure.supabase._rest_client import PostgrestError
from menuhub.infrastructure.supabase.connection import TenantConnection
from menuhub.infrastructure.supabase.connection_cache import (
    KeyedConnectionCache,
    SingleSlotConnectionCache,
    build_connection_cache,
)
from menuhub.infrastructure.supabase.directory_store import SupabaseDirectoryStore

__all__ = [
    "KeyedConnectionCache",
    "PostgrestError",
    "SingleSlotConnectionCache",
    "SupabaseDirectoryStore",
    "TenantConnection",
    "build_connection_cache",
]
