"""Abstract base class for snapshot storage providers.

Defines the three-method contract the vector store uses to persist and
restore its snapshot: a key-addressed blob holding a list of serialized
records.  Implementations may target a file on disk, a SQLite key-value
table, or any dict-like mapping.  The index never depends on which one is
wired in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from memory_vector_store.models.document import SerializedRecord


# Concrete implementations (memory_vector_store/providers/storage/):
#   FileStorageProvider            - JSON file per key, atomic replace on write
#   SQLiteKeyValueStorageProvider  - one row per key in a SQLite table
#   MappingStorageProvider         - JSON strings in any MutableMapping
class IStorageProvider(ABC):
    """Contract for snapshot persistence backends.

    Methods are synchronous: each call touches exactly one blob, and the
    vector store relies on the write completing without yielding to the
    event loop.
    """

    @abstractmethod
    def save(self, key: str, records: list[SerializedRecord]) -> None:
        """Persist *records* under *key*, replacing any previous snapshot.

        Parameters
        ----------
        key:
            File path or storage key of the snapshot.
        records:
            Serialized ``[content, vector, metadata?]`` entries.

        Raises
        ------
        memory_vector_store.utils.errors.StorageError
            If the snapshot cannot be written.
        """

    @abstractmethod
    def load(self, key: str) -> list[SerializedRecord]:
        """Load the snapshot stored under *key*.

        Returns
        -------
        list[SerializedRecord]
            The stored entries, or an empty list when nothing is stored.

        Raises
        ------
        memory_vector_store.utils.errors.StorageError
            If the stored payload is unreadable.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return ``True`` if a snapshot is stored under *key*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"file_storage"``."""
