"""
Storage gateway for the slug -> URL map.

This module provides:
- KeyValueStore interface: Abstract base class for store backends
- MemoryStore: dict-backed store for tests and local runs
- SQLStore: SQLAlchemy-backed store (SQLite by default)
- create_store(): picks the backend named in settings
"""

from shorturl.core.setting import Settings, StorageBackend
from shorturl.db.interface import KeyValueStore
from shorturl.db.memory_store import MemoryStore
from shorturl.db.sql_store import SQLStore


async def create_store(settings: Settings) -> KeyValueStore:
    """
    Build and initialize the store configured in settings.

    The SQL backend gets its table created if missing, so a fresh SQLite
    file works without running migrations first.
    """
    if settings.STORAGE_BACKEND is StorageBackend.memory:
        return MemoryStore()

    store = SQLStore.from_url(settings.DATABASE_URL)
    await store.create_tables()
    return store


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SQLStore",
    "create_store",
]
