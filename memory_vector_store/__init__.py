"""memory-vector-store: a lightweight in-memory vector index with persistence.

Quick start::

    from memory_vector_store import create_vector_store, doc

    store = create_vector_store(lambda text: [len(text)], storage_path="./data/demo.json")
    await store.add(doc("Adidas Running Shoes", {"brand": "adidas"}))
    results = await store.similarity_search("foot", k=2)
"""

from memory_vector_store.main import create_kv_vector_store, create_vector_store
from memory_vector_store.models.document import (
    Document,
    SearchResult,
    VectorDocument,
    doc,
)
from memory_vector_store.models.options import VectorStoreOptions
from memory_vector_store.services.index_registry import IndexRegistry, default_registry
from memory_vector_store.services.vector_store import VectorStore
from memory_vector_store.utils.errors import (
    ConfigurationError,
    EmbeddingError,
    InvalidVectorError,
    MemoryVectorStoreError,
    StorageError,
)
from memory_vector_store.utils.logging import configure_logging

__all__ = [
    "ConfigurationError",
    "Document",
    "EmbeddingError",
    "IndexRegistry",
    "InvalidVectorError",
    "MemoryVectorStoreError",
    "SearchResult",
    "StorageError",
    "VectorDocument",
    "VectorStore",
    "VectorStoreOptions",
    "configure_logging",
    "create_kv_vector_store",
    "create_vector_store",
    "default_registry",
    "doc",
]
