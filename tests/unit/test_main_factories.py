"""Unit tests for the factory functions in memory_vector_store/main.py.

Covers default wiring from Settings, keyword overrides, size clamping per
backend, and rejection of invalid options.  Settings are built explicitly so
no real environment or .env file leaks in.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from memory_vector_store.config.settings import Settings
from memory_vector_store.main import create_kv_vector_store, create_vector_store
from memory_vector_store.services.index_registry import IndexRegistry
from memory_vector_store.services.vector_store import VectorStore
from memory_vector_store.utils.errors import ConfigurationError


# ======================================================================
# Shared helpers
# ======================================================================


def _settings(tmp_path: Path, **overrides) -> Settings:
    """Build a Settings instance pointing every path into *tmp_path*."""
    defaults = {
        "vector_store_path": str(tmp_path / "data" / "memory_vector_store.json"),
        "vector_store_auto_save": True,
        "vector_store_debug": False,
        "vector_store_max_file_size_mb": 500,
        "kv_store_db_path": str(tmp_path / "data" / "memory_vector_store.db"),
        "kv_store_key": "memory-vector-store",
        "kv_store_max_file_size_mb": 3,
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


def _parser(text: str) -> list[float]:
    return [float(len(text))]


# ======================================================================
# create_vector_store
# ======================================================================


class TestCreateVectorStore:
    def test_defaults_from_settings(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        store = create_vector_store(_parser, registry=IndexRegistry(), settings=settings)

        assert isinstance(store, VectorStore)
        assert store.options.auto_save is True
        assert store.options.debug is False
        assert store.options.max_file_size_mb == 500
        assert store.options.storage_path == str(Path(settings.vector_store_path).resolve())

    def test_overrides_win(self, tmp_path: Path) -> None:
        path = tmp_path / "products.json"
        store = create_vector_store(
            _parser,
            registry=IndexRegistry(),
            settings=_settings(tmp_path),
            storage_path=str(path),
            debug=True,
            auto_save=False,
        )
        assert store.options.storage_path == str(path.resolve())
        assert store.options.debug is True
        assert store.options.auto_save is False

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(0.5, 1), (1, 1), (250, 250), (1000, 1000), (5000, 1000)],
    )
    def test_size_clamped_to_file_range(self, tmp_path: Path, requested: float, expected: float) -> None:
        store = create_vector_store(
            _parser,
            registry=IndexRegistry(),
            settings=_settings(tmp_path),
            max_file_size_mb=requested,
        )
        assert store.options.max_file_size_mb == expected

    def test_relative_paths_share_state(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        registry = IndexRegistry()
        settings = _settings(tmp_path)

        create_vector_store(_parser, registry=registry, settings=settings, storage_path="v.json")
        create_vector_store(_parser, registry=registry, settings=settings, storage_path="./v.json")

        assert list(registry.paths()) == [str((tmp_path / "v.json").resolve())]

    def test_empty_path_disables_persistence(self, tmp_path: Path) -> None:
        registry = IndexRegistry()
        store = create_vector_store(
            _parser, registry=registry, settings=_settings(tmp_path), storage_path=""
        )
        assert store.options.storage_path == ""
        assert len(registry) == 0

    def test_unknown_option_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="max_size"):
            create_vector_store(_parser, registry=IndexRegistry(), settings=_settings(tmp_path), max_size=3)

    def test_non_positive_size_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            create_vector_store(
                _parser, registry=IndexRegistry(), settings=_settings(tmp_path), max_file_size_mb=0
            )

    @pytest.mark.asyncio
    async def test_end_to_end(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        store = create_vector_store(_parser, registry=IndexRegistry(), settings=settings)
        await store.add("hello")
        await store.save()
        assert Path(settings.vector_store_path).read_text(encoding="utf-8") == '[["hello",[5.0]]]'


# ======================================================================
# create_kv_vector_store
# ======================================================================


class TestCreateKVVectorStore:
    def test_defaults_from_settings(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        store = create_kv_vector_store(_parser, registry=IndexRegistry(), settings=settings)

        assert store.options.storage_path == "memory-vector-store"
        assert store.options.max_file_size_mb == 3
        assert Path(settings.kv_store_db_path).exists()

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(0.01, 0.1), (0.1, 0.1), (2, 2), (3, 3), (10, 3)],
    )
    def test_size_clamped_to_kv_range(self, tmp_path: Path, requested: float, expected: float) -> None:
        store = create_kv_vector_store(
            _parser,
            registry=IndexRegistry(),
            settings=_settings(tmp_path),
            max_file_size_mb=requested,
        )
        assert store.options.max_file_size_mb == expected

    def test_db_path_argument_wins(self, tmp_path: Path) -> None:
        db_path = tmp_path / "custom" / "kv.db"
        create_kv_vector_store(
            _parser, db_path=db_path, registry=IndexRegistry(), settings=_settings(tmp_path)
        )
        assert db_path.exists()

    @pytest.mark.asyncio
    async def test_keys_select_independent_snapshots(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        registry = IndexRegistry()
        products = create_kv_vector_store(
            _parser, registry=registry, settings=settings, storage_path="products"
        )
        articles = create_kv_vector_store(
            _parser, registry=registry, settings=settings, storage_path="articles"
        )

        await products.add("shoe")
        await products.save()

        reopened = create_kv_vector_store(
            _parser, registry=IndexRegistry(), settings=settings, storage_path="products"
        )
        assert [d.content for d in reopened.get_all()] == ["shoe"]
        assert articles.count() == 0

    @pytest.mark.asyncio
    async def test_same_key_in_different_databases_stays_separate(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path, vector_store_auto_save=False)
        registry = IndexRegistry()
        store_a = create_kv_vector_store(
            _parser, db_path=tmp_path / "a.db", registry=registry, settings=settings
        )
        await store_a.add("only-in-a")

        store_b = create_kv_vector_store(
            _parser, db_path=tmp_path / "b.db", registry=registry, settings=settings
        )
        assert store_b.count() == 0
        assert len(registry) == 2

    def test_same_database_and_key_share_state(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        registry = IndexRegistry()
        create_kv_vector_store(_parser, db_path=tmp_path / "kv.db", registry=registry, settings=settings)
        create_kv_vector_store(
            _parser, db_path=str(tmp_path / "." / "kv.db"), registry=registry, settings=settings
        )
        assert list(registry.paths()) == [f"{(tmp_path / 'kv.db').resolve()}::memory-vector-store"]
