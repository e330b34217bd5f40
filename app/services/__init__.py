"""
Services module for the ISO 27001 Risk Assessment service.
"""

from app.services.kv_store import KVStore, get_kv_store
from app.services.supabase_client import get_supabase
from app.services.auth_service import AuthService


__all__ = [
    # Storage
    "KVStore",
    "get_kv_store",

    # Identity
    "get_supabase",
    "AuthService",
]
