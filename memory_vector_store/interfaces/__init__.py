"""Public interface definitions for the vector store and its adapters.

The index and its collaborators are accessed through the abstract base
classes in this package; concrete adapters are injected at construction
time (see ``memory_vector_store/main.py`` for the default wiring).

CONCRETE PROVIDER MAP:
    Interface            →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    IVectorStore         →  VectorStore (services/)
    IStorageProvider     →  FileStorageProvider, SQLiteKeyValueStorageProvider,
                            MappingStorageProvider (providers/storage/)
    IEmbeddingProvider   →  OpenAIEmbeddingProvider, NomicEmbeddingProvider
                            (providers/embedding/)
"""

from memory_vector_store.interfaces.embedding_provider import IEmbeddingProvider, VectorParser
from memory_vector_store.interfaces.storage_provider import IStorageProvider
from memory_vector_store.interfaces.vector_store import DocumentFilter, IVectorStore

__all__ = [
    "DocumentFilter",
    "IEmbeddingProvider",
    "IStorageProvider",
    "IVectorStore",
    "VectorParser",
]
