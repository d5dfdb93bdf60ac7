"""Snapshot storage providers.

FileStorageProvider is the default for server-side use: one JSON file per
store, written atomically.  SQLiteKeyValueStorageProvider keeps many small
snapshots in one database, keyed like browser ``localStorage``.
MappingStorageProvider wraps any dict-like object and is the simplest way to
wire an ephemeral store in tests.
"""

from memory_vector_store.providers.storage.file_storage import FileStorageProvider
from memory_vector_store.providers.storage.mapping_storage import MappingStorageProvider
from memory_vector_store.providers.storage.sqlite_kv_storage import (
    SQLiteKeyValueStorageProvider,
    SQLiteKeyValueStore,
)

__all__ = [
    "FileStorageProvider",
    "MappingStorageProvider",
    "SQLiteKeyValueStorageProvider",
    "SQLiteKeyValueStore",
]
