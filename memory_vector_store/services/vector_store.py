"""In-memory vector index with size-bounded, debounced persistence.

Stores text documents alongside caller-computed embeddings, answers
brute-force cosine-similarity queries with optional predicate filtering,
and snapshots its contents through an :class:`IStorageProvider`.

# ─── HOW PERSISTENCE WORKS ────────────────────────────────────────────
#
#   add/remove/clear ──→ in-memory map (immediate) ──→ dirty = True
#                                                   │
#                              auto_save? ──→ _schedule_save()
#                                                   │
#            gate.lock() + debounce(registry_key, 0.1 s) ──→ _persist()
#                                                   │
#      serialize → trim oldest until size fits → rebuild map → adapter.save
#                                                   │
#                             dirty = False, gate.unlock() (always)
#
# Readers (similarity_search, save callers) await the gate, so they never
# see the map while a trim is rewriting it.  _persist never awaits, so the
# whole serialize-trim-write sequence runs without interleaving.  A write
# whose timer died with an earlier event loop is re-issued on the current
# loop before anyone waits on the gate.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import inspect
import json
import numbers
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

import numpy as np
import structlog

from memory_vector_store.interfaces.embedding_provider import VectorParser
from memory_vector_store.interfaces.storage_provider import IStorageProvider
from memory_vector_store.interfaces.vector_store import DocumentFilter, IVectorStore
from memory_vector_store.models.document import (
    Document,
    EmbeddingRecord,
    SearchResult,
    VectorDocument,
    deserialize_record,
    serialize_record,
)
from memory_vector_store.models.options import VectorStoreOptions
from memory_vector_store.services.index_registry import (
    IndexRegistry,
    SharedState,
    default_registry,
)
from memory_vector_store.utils.concurrency import Debouncer, debounce
from memory_vector_store.utils.errors import InvalidVectorError
from memory_vector_store.utils.logging import truncate_for_log
from memory_vector_store.utils.similarity import cosine_similarity

logger = structlog.get_logger(logger_name=__name__)

M = TypeVar("M")

SAVE_DEBOUNCE_SECONDS = 0.1


class VectorStore(IVectorStore[M], Generic[M]):
    """A lightweight in-memory vector store with persistence.

    Parameters
    ----------
    vector_parser:
        Callable turning text into a vector; may return an awaitable.
    storage_provider:
        Backend used to load and save snapshots.
    options:
        Per-index options; ``storage_path`` is the key the snapshot is
        stored under.
    registry:
        Registry of shared state.  Defaults to the process-wide
        ``default_registry``.
    debouncer:
        Scheduler coalescing save requests.  Defaults to the process-wide
        ``debounce`` instance.
    registry_key:
        Identity of the backing snapshot in *registry* and *debouncer*.
        Defaults to ``storage_path``; backends where the same key can name
        different snapshots (one row key in several databases) pass a
        qualified key.
    """

    def __init__(
        self,
        vector_parser: VectorParser,
        storage_provider: IStorageProvider,
        options: VectorStoreOptions | None = None,
        registry: IndexRegistry | None = None,
        debouncer: Debouncer | None = None,
        registry_key: str | None = None,
    ) -> None:
        self._vector_parser = vector_parser
        self._storage = storage_provider
        self._options = options if options is not None else VectorStoreOptions()
        self._registry = registry if registry is not None else default_registry
        self._debouncer = debouncer if debouncer is not None else debounce
        self._registry_key = registry_key or self._options.storage_path or ""
        self._logger: structlog.BoundLogger = logger.bind(
            storage_path=self._options.storage_path
        )
        self._state = self._attach()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def options(self) -> VectorStoreOptions:
        return self._options

    @property
    def is_dirty(self) -> bool:
        """``True`` while in-memory content differs from the last saved snapshot."""
        return self._state.dirty

    # ------------------------------------------------------------------
    # IVectorStore implementation
    # ------------------------------------------------------------------

    async def add(self, document: Document[M] | str) -> VectorDocument[M]:
        """Embed *document* and store it, replacing any entry with the same content."""
        if isinstance(document, str):
            document = Document(content=document)

        if document.content in self._state.store:
            self._debug("vector_store_overwrite", content=truncate_for_log(document.content))
        else:
            self._debug("vector_store_add", content=truncate_for_log(document.content))

        vector = await self._embed(document.content)
        self._state.store[document.content] = EmbeddingRecord(
            vector=vector, metadata=document.metadata
        )
        self._mark_dirty()

        return VectorDocument(content=document.content, vector=vector, metadata=document.metadata)

    async def similarity_search(
        self,
        query: str,
        k: int = 4,
        filter: DocumentFilter | None = None,
    ) -> list[SearchResult[M]]:
        """Return the *k* stored documents most similar to *query*."""
        if k <= 0:
            return []

        self._resume_orphaned_save()
        await self._state.gate.wait()

        cached = self._state.store.get(query)
        if cached is not None:
            self._debug("vector_store_query_cache_hit", query=truncate_for_log(query))
            query_vector = cached.vector
        else:
            query_vector = await self._embed(query)

        candidates = list(self._state.store.items())
        if filter is not None:
            candidates = [
                (content, record)
                for content, record in candidates
                if filter(Document(content=content, metadata=record.metadata))
            ]

        scored = [
            (cosine_similarity(query_vector, record.vector), content, record)
            for content, record in candidates
        ]
        # list.sort is stable, also with reverse=True: ties keep insertion order.
        scored.sort(key=lambda item: item[0], reverse=True)

        return [
            SearchResult(content=content, metadata=record.metadata, score=score)
            for score, content, record in scored[:k]
        ]

    async def remove(self, content: str) -> None:
        """Delete the entry keyed by *content*; no-op if absent."""
        if self._state.store.pop(content, None) is None:
            return
        self._debug("vector_store_remove", content=truncate_for_log(content))
        self._mark_dirty()

    def clear(self) -> None:
        """Remove every entry.  Persistence of the empty state is asynchronous."""
        if not self._state.store:
            return
        self._state.store.clear()
        self._debug("vector_store_cleared")
        self._mark_dirty()

    def get_all(self) -> list[Document[M]]:
        return [
            Document(content=content, metadata=record.metadata)
            for content, record in self._state.store.items()
        ]

    def count(self) -> int:
        return len(self._state.store)

    async def save(self) -> None:
        """Persist unsaved changes and wait for the debounced write to finish.

        Returns immediately when nothing changed or no storage path is
        configured.  Write failures are logged and leave the store dirty.
        """
        self._resume_orphaned_save()
        if not self._schedule_save():
            return
        await self._state.gate.wait()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _attach(self) -> SharedState:
        """Attach to the registered state for our path, loading it on first use."""
        storage_path = self._options.storage_path
        if not storage_path:
            return SharedState()

        state = self._registry.get(self._registry_key)
        if state is not None:
            self._debug("vector_store_attached", entries=len(state.store))
            return state

        return self._registry.register(self._registry_key, self._load(storage_path))

    def _load(self, storage_path: str) -> SharedState:
        """Build state from the stored snapshot; any failure yields an empty store."""
        state = SharedState()
        try:
            if self._storage.exists(storage_path):
                for item in self._storage.load(storage_path):
                    content, record = deserialize_record(item)
                    state.store[content] = record
                self._debug("vector_store_loaded", entries=len(state.store))
            else:
                self._debug("vector_store_snapshot_missing")
        except Exception as exc:
            self._logger.error(
                "vector_store_load_failed",
                provider=self._storage.get_provider_name(),
                error=str(exc),
            )
            state.store = {}
        return state

    async def _embed(self, text: str) -> list[float]:
        result = self._vector_parser(text)
        if inspect.isawaitable(result):
            result = await result
        return _validate_vector(result)

    def _mark_dirty(self) -> None:
        self._state.dirty = True
        if self._options.auto_save:
            self._schedule_save()

    def _schedule_save(self) -> bool:
        """Lock the gate and (re)start the debounced write.

        Returns ``False`` when there is nothing to save or no event loop is
        running to host the write; the dirty flag is left untouched then.
        """
        storage_path = self._options.storage_path
        if not self._state.dirty or not storage_path:
            return False

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self._debug("vector_store_save_deferred", reason="no running event loop")
            return False

        self._state.gate.lock()
        self._debouncer.schedule(self._registry_key, self._persist, SAVE_DEBOUNCE_SECONDS)
        return True

    def _resume_orphaned_save(self) -> None:
        """Re-issue a pending write whose timer died with its event loop.

        The gate stays locked from ``_schedule_save`` until ``_persist``
        runs; if the loop hosting the timer stopped first, nothing would
        ever unlock it.
        """
        gate = self._state.gate
        if not gate.locked or self._debouncer.pending(self._registry_key):
            return
        self._logger.warning("vector_store_save_orphaned", dirty=self._state.dirty)
        gate.unlock()
        self._schedule_save()

    def _persist(self) -> None:
        """Serialize, trim to the size bound, and write the snapshot.

        Runs as the debounced task.  Never raises: failures are logged and
        the dirty flag stays set so a later save retries.
        """
        state = self._state
        storage_path = self._options.storage_path
        try:
            max_bytes = self._options.max_file_size_bytes
            entries = list(state.store.items())
            serialized = [serialize_record(content, record) for content, record in entries]
            sizes = [_encoded_size(item) for item in serialized]
            total = _array_size(sizes)

            if total > max_bytes and serialized:
                self._debug(
                    "vector_store_size_exceeded",
                    size=_format_size(total),
                    limit=_format_size(max_bytes),
                )
                # Drop oldest entries first.  Removing the head of an n-item
                # array saves its own bytes plus one separator while n > 1.
                evicted = 0
                while total > max_bytes and evicted < len(serialized):
                    remaining = len(serialized) - evicted
                    total -= sizes[evicted] + (1 if remaining > 1 else 0)
                    evicted += 1

                serialized = serialized[evicted:]
                state.store = dict(entries[evicted:])
                self._debug(
                    "vector_store_trimmed",
                    kept=len(serialized),
                    evicted=evicted,
                    size=_format_size(total),
                )

            self._storage.save(storage_path, serialized)
            state.dirty = False
            self._debug(
                "vector_store_saved",
                entries=len(serialized),
                size=_format_size(total),
            )
        except Exception as exc:
            self._logger.error(
                "vector_store_save_failed",
                provider=self._storage.get_provider_name(),
                error=str(exc),
            )
        finally:
            state.gate.unlock()

    def _debug(self, event: str, **fields: Any) -> None:
        """Emit a lifecycle event when the store was created with ``debug=True``."""
        if self._options.debug:
            self._logger.info(event, **fields)


# ---------------------------------------------------------------------------
# Module helpers
# ---------------------------------------------------------------------------


def _validate_vector(result: Any) -> list[float]:
    """Coerce a parser result to ``list[float]`` or raise InvalidVectorError."""
    if isinstance(result, np.ndarray):
        if result.ndim != 1:
            raise InvalidVectorError(
                f"Vector parser returned a {result.ndim}-dimensional array; expected 1"
            )
        result = result.tolist()

    if isinstance(result, (str, bytes)) or not isinstance(result, Sequence):
        raise InvalidVectorError(
            f"Vector parser must return a sequence of numbers, got {type(result).__name__}"
        )

    vector: list[float] = []
    for index, value in enumerate(result):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidVectorError(
                f"Vector element {index} is {type(value).__name__}, expected a number"
            )
        vector.append(float(value))
    return vector


def _encoded_size(item: Any) -> int:
    """UTF-8 byte length of *item* in compact JSON."""
    return len(json.dumps(item, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def _array_size(sizes: list[int]) -> int:
    """Byte length of a compact JSON array whose items encode to *sizes*."""
    return 2 + sum(sizes) + max(len(sizes) - 1, 0)


def _format_size(size: float) -> str:
    if size < 1024:
        return f"{int(size)} bytes"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"
