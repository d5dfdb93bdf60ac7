"""Factory functions wiring a VectorStore to its default storage backend.

Two flavours, differing only in backend and size limits:

- :func:`create_vector_store`: one JSON file per store on the filesystem,
  ``max_file_size_mb`` clamped to 1..1000 MB (default 500).
- :func:`create_kv_vector_store`: a row in a SQLite key-value table, the
  local stand-in for browser ``localStorage``, ``max_file_size_mb`` clamped
  to 0.1..3 MB (default 3).

Defaults come from :class:`Settings` (environment / ``.env``); keyword
overrides win.

Example::

    store = create_vector_store(embed, storage_path="./data/products.json", debug=True)
    await store.add(doc("Adidas Running Shoes", {"brand": "adidas"}))
    results = await store.similarity_search("foot", k=2)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from memory_vector_store.config.settings import Settings
from memory_vector_store.interfaces.embedding_provider import VectorParser
from memory_vector_store.models.options import VectorStoreOptions
from memory_vector_store.providers.storage.file_storage import FileStorageProvider
from memory_vector_store.providers.storage.sqlite_kv_storage import SQLiteKeyValueStorageProvider
from memory_vector_store.services.index_registry import IndexRegistry
from memory_vector_store.services.vector_store import VectorStore
from memory_vector_store.utils.errors import ConfigurationError

FILE_MIN_SIZE_MB = 1
FILE_MAX_SIZE_MB = 1000
KV_MIN_SIZE_MB = 0.1
KV_MAX_SIZE_MB = 3

_logger: structlog.BoundLogger = structlog.get_logger(logger_name=__name__)


def _build_options(defaults: dict[str, Any], overrides: dict[str, Any]) -> VectorStoreOptions:
    """Merge keyword overrides over defaults into validated options."""
    unknown = set(overrides) - set(VectorStoreOptions.model_fields)
    if unknown:
        raise ConfigurationError(f"Unknown vector store option(s): {', '.join(sorted(unknown))}")
    try:
        return VectorStoreOptions(**{**defaults, **overrides})
    except ValueError as exc:
        raise ConfigurationError(f"Invalid vector store options: {exc}") from exc


def create_vector_store(
    vector_parser: VectorParser,
    *,
    registry: IndexRegistry | None = None,
    settings: Settings | None = None,
    **overrides: Any,
) -> VectorStore:
    """Create a file-backed vector store.

    Parameters
    ----------
    vector_parser:
        Callable mapping text to a vector (sync or async).
    registry:
        Shared-state registry; defaults to the process-wide one.
    settings:
        Source of defaults; read from the environment when omitted.
    **overrides:
        Any :class:`VectorStoreOptions` field (``storage_path``,
        ``auto_save``, ``debug``, ``max_file_size_mb``).
    """
    app_settings = settings if settings is not None else Settings()
    defaults = {
        "auto_save": app_settings.vector_store_auto_save,
        "debug": app_settings.vector_store_debug,
        "max_file_size_mb": app_settings.vector_store_max_file_size_mb,
        "storage_path": app_settings.vector_store_path,
    }
    options = _build_options(defaults, overrides).clamped(FILE_MIN_SIZE_MB, FILE_MAX_SIZE_MB)
    if options.storage_path:
        # One registry entry per file, however the path was spelled.
        options = options.model_copy(
            update={"storage_path": str(Path(options.storage_path).resolve())}
        )

    _logger.debug(
        "vector_store_created",
        backend="file",
        storage_path=options.storage_path,
        max_file_size_mb=options.max_file_size_mb,
    )
    return VectorStore(vector_parser, FileStorageProvider(), options, registry=registry)


def create_kv_vector_store(
    vector_parser: VectorParser,
    *,
    db_path: str | Path | None = None,
    registry: IndexRegistry | None = None,
    settings: Settings | None = None,
    **overrides: Any,
) -> VectorStore:
    """Create a vector store persisted to a SQLite key-value table.

    ``storage_path`` is the row key (default ``"memory-vector-store"``);
    *db_path* selects the database file (default ``kv_store_db_path``).
    Stores share state only when both the database file and the row key
    match.
    """
    app_settings = settings if settings is not None else Settings()
    defaults = {
        "auto_save": app_settings.vector_store_auto_save,
        "debug": app_settings.vector_store_debug,
        "max_file_size_mb": app_settings.kv_store_max_file_size_mb,
        "storage_path": app_settings.kv_store_key,
    }
    options = _build_options(defaults, overrides).clamped(KV_MIN_SIZE_MB, KV_MAX_SIZE_MB)
    database = Path(db_path or app_settings.kv_store_db_path).resolve()
    storage = SQLiteKeyValueStorageProvider(database)
    registry_key = f"{database}::{options.storage_path}" if options.storage_path else None

    _logger.debug(
        "vector_store_created",
        backend="sqlite_kv",
        db_path=str(database),
        storage_path=options.storage_path,
        max_file_size_mb=options.max_file_size_mb,
    )
    return VectorStore(
        vector_parser, storage, options, registry=registry, registry_key=registry_key
    )
