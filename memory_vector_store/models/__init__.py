"""memory-vector-store data models - re-exports all public model classes.

    - document.py - documents, embedding records, search results and the
                    positional storage form
    - options.py  - per-index configuration
"""

from __future__ import annotations

from memory_vector_store.models.document import (
    Document,
    EmbeddingRecord,
    SearchResult,
    SerializedRecord,
    VectorDocument,
    deserialize_record,
    doc,
    serialize_record,
)
from memory_vector_store.models.options import BYTES_PER_MB, VectorStoreOptions

__all__ = [
    # document
    "Document",
    "EmbeddingRecord",
    "SearchResult",
    "SerializedRecord",
    "VectorDocument",
    "deserialize_record",
    "doc",
    "serialize_record",
    # options
    "BYTES_PER_MB",
    "VectorStoreOptions",
]
