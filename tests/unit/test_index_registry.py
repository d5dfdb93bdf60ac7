"""Unit tests for IndexRegistry and SharedState."""

from __future__ import annotations

from memory_vector_store.models.document import EmbeddingRecord
from memory_vector_store.services.index_registry import IndexRegistry, SharedState


class TestSharedState:
    def test_defaults(self) -> None:
        state = SharedState()
        assert state.dirty is False
        assert state.store == {}
        assert state.gate.locked is False

    def test_instances_do_not_share_maps(self) -> None:
        first, second = SharedState(), SharedState()
        first.store["a"] = EmbeddingRecord(vector=[1.0])
        assert second.store == {}
        assert first.gate is not second.gate


class TestIndexRegistry:
    def test_get_unknown_path(self) -> None:
        assert IndexRegistry().get("nowhere") is None

    def test_register_and_get(self) -> None:
        registry = IndexRegistry()
        state = SharedState()
        assert registry.register("a.json", state) is state
        assert registry.get("a.json") is state
        assert "a.json" in registry
        assert len(registry) == 1

    def test_existing_state_wins(self) -> None:
        registry = IndexRegistry()
        first = registry.register("a.json", SharedState())
        second = registry.register("a.json", SharedState())
        assert second is first

    def test_paths(self) -> None:
        registry = IndexRegistry()
        registry.register("a.json", SharedState())
        registry.register("b.json", SharedState())
        assert sorted(registry.paths()) == ["a.json", "b.json"]

    def test_registries_are_independent(self) -> None:
        first, second = IndexRegistry(), IndexRegistry()
        first.register("a.json", SharedState())
        assert "a.json" not in second
