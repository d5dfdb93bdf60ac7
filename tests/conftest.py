"""Shared pytest fixtures for the memory-vector-store test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from memory_vector_store.models.document import SerializedRecord
from memory_vector_store.models.options import VectorStoreOptions
from memory_vector_store.providers.storage.mapping_storage import MappingStorageProvider
from memory_vector_store.services.index_registry import IndexRegistry
from memory_vector_store.services.vector_store import VectorStore
from memory_vector_store.utils.concurrency import Debouncer

# ---------------------------------------------------------------------------
# Fixed embeddings
# ---------------------------------------------------------------------------

# Hand-picked 3-d vectors so expected rankings can be read off directly.
_FRUIT_VECTORS: dict[str, list[float]] = {
    "apple": [1.0, 0.0, 0.0],
    "banana": [0.0, 1.0, 0.0],
    "cherry": [1.0, 1.0, 0.0],
    "durian": [0.0, 0.0, 1.0],
    "red fruit": [1.0, 0.1, 0.0],
}


def _fruit_parser(text: str) -> list[float]:
    """Return the fixed vector for *text*, ``[0, 0, 1]`` for unknown text."""
    return list(_FRUIT_VECTORS.get(text, [0.0, 0.0, 1.0]))


def _length_parser(text: str) -> list[float]:
    """One-dimensional embedding: the text length."""
    return [float(len(text))]


class RecordingStorageProvider(MappingStorageProvider):
    """Mapping storage that remembers every save call."""

    def __init__(self) -> None:
        super().__init__({})
        self.save_calls: list[tuple[str, list[SerializedRecord]]] = []

    def save(self, key: str, records: list[SerializedRecord]) -> None:
        self.save_calls.append((key, records))
        super().save(key, records)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> IndexRegistry:
    """Return an empty registry so stores never leak between tests."""
    return IndexRegistry()


@pytest.fixture
def debouncer() -> Debouncer:
    return Debouncer()


@pytest.fixture
def storage() -> RecordingStorageProvider:
    return RecordingStorageProvider()


@pytest.fixture
def snapshot_path(tmp_path: Path) -> str:
    """Return a not-yet-existing snapshot file path inside tmp_path."""
    return str(tmp_path / "data" / "vectors.json")


@pytest.fixture
def make_store(
    registry: IndexRegistry,
    debouncer: Debouncer,
    storage: RecordingStorageProvider,
) -> Callable[..., VectorStore]:
    """Build a VectorStore wired to the test registry, debouncer and storage.

    Keyword arguments are VectorStoreOptions fields; ``parser`` and
    ``storage_provider`` override the defaults.
    """

    def _factory(
        parser: Callable[[str], Any] = _fruit_parser,
        storage_provider: Any = None,
        **options: Any,
    ) -> VectorStore:
        options.setdefault("storage_path", "test-store")
        return VectorStore(
            parser,
            storage_provider if storage_provider is not None else storage,
            VectorStoreOptions(**options),
            registry=registry,
            debouncer=debouncer,
        )

    return _factory


@pytest.fixture
def fruit_parser() -> Callable[[str], list[float]]:
    """Parser over the fixed fruit vectors (see ``_FRUIT_VECTORS``)."""
    return _fruit_parser


@pytest.fixture
def length_parser() -> Callable[[str], list[float]]:
    return _length_parser
