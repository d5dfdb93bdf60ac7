"""Registry of live index state, keyed by storage path.

Every :class:`~memory_vector_store.services.vector_store.VectorStore`
constructed with the same ``storage_path`` attaches to one
:class:`SharedState`, so handles created in different parts of a program
observe each other's mutations without reloading from storage.  SQLite
stores register under ``<database>::<row key>`` so one row key in two
databases stays two indexes.

The registry is injectable.  ``default_registry`` is the process-lifetime
instance used when none is supplied; tests pass a fresh
:class:`IndexRegistry` to keep stores isolated.  Entries are never removed:
state for every storage path used stays in memory until the process exits.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog

from memory_vector_store.models.document import EmbeddingRecord
from memory_vector_store.utils.concurrency import Locker

logger = structlog.get_logger(logger_name=__name__)


def _released_gate() -> Locker:
    gate = Locker()
    gate.unlock()
    return gate


@dataclass
class SharedState:
    """Backing state shared by every index handle over one storage path.

    ``dirty`` is ``True`` iff ``store`` has diverged from the last durable
    snapshot.  ``gate`` is locked while a save of this state is pending.
    """

    dirty: bool = False
    store: dict[str, EmbeddingRecord] = field(default_factory=dict)
    gate: Locker = field(default_factory=_released_gate)


class IndexRegistry:
    """Mapping of storage path to the :class:`SharedState` attached to it."""

    def __init__(self) -> None:
        self._states: dict[str, SharedState] = {}

    def get(self, storage_path: str) -> SharedState | None:
        """Return the state registered for *storage_path*, or ``None``."""
        return self._states.get(storage_path)

    def register(self, storage_path: str, state: SharedState) -> SharedState:
        """Register *state* for *storage_path* unless one is already registered.

        Returns
        -------
        SharedState
            The state now registered for the path; the existing one wins.
        """
        existing = self._states.setdefault(storage_path, state)
        if existing is state:
            logger.debug(
                "index_state_registered",
                storage_path=storage_path,
                entries=len(state.store),
            )
        return existing

    def paths(self) -> Iterator[str]:
        return iter(list(self._states))

    def __contains__(self, storage_path: object) -> bool:
        return storage_path in self._states

    def __len__(self) -> int:
        return len(self._states)


default_registry = IndexRegistry()
