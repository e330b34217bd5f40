"""
Base Repository - ISO 27001 Risk Assessment
app/repositories/base.py

Base repository class holding the key-value store handle.
"""

from typing import Optional

from app.services.kv_store import KVStore, get_kv_store


class BaseRepository:
    """Base repository over the Redis-backed key-value store."""

    def __init__(self, store: Optional[KVStore] = None):
        self._store = store

    @property
    def store(self) -> KVStore:
        """Resolve the shared store lazily so construction never connects."""
        if self._store is None:
            self._store = get_kv_store()
        return self._store

    def ping(self) -> bool:
        return self.store.ping()
