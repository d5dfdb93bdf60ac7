"""Utility modules for memory-vector-store.

Available utility modules (all re-exported here for convenience):

- **concurrency** -- the asyncio save gate (``Locker``) and the per-key
  debounce scheduler that coalesces bursts of mutations into one write.
- **errors** -- Domain-specific exception hierarchy rooted at
  MemoryVectorStoreError; each adapter raises its own subclass so callers can
  handle failures granularly without broad ``except Exception`` blocks.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **similarity** -- numpy cosine similarity used to rank search results.
"""

# -- Async concurrency primitives ------------------------------------------
from memory_vector_store.utils.concurrency import Debouncer, Locker, debounce

# -- Domain exception hierarchy --------------------------------------------
from memory_vector_store.utils.errors import (
    ConfigurationError,
    EmbeddingError,
    InvalidVectorError,
    MemoryVectorStoreError,
    StorageError,
)

# -- Structured logging setup ----------------------------------------------
from memory_vector_store.utils.logging import configure_logging, get_logger

# -- Vector math -----------------------------------------------------------
from memory_vector_store.utils.similarity import cosine_similarity

__all__ = [
    "ConfigurationError",
    "Debouncer",
    "EmbeddingError",
    "InvalidVectorError",
    "Locker",
    "MemoryVectorStoreError",
    "StorageError",
    "configure_logging",
    "cosine_similarity",
    "debounce",
    "get_logger",
]
