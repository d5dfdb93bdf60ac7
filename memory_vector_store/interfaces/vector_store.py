"""Abstract base class for the memory vector store.

Defines the public surface of an index: mutation (add/remove/clear),
inspection (get_all/count), similarity search and persistence.  The concrete
implementation lives in :mod:`memory_vector_store.services.vector_store`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

from memory_vector_store.models.document import Document, SearchResult, VectorDocument

M = TypeVar("M")

DocumentFilter = Callable[[Document], bool]


class IVectorStore(ABC, Generic[M]):
    """Contract for an in-memory vector index with optional persistence.

    Mutations apply to the in-memory map immediately; persistence happens in
    the background (auto-save) or on an explicit :meth:`save`.
    """

    @abstractmethod
    async def add(self, document: Document[M] | str) -> VectorDocument[M]:
        """Embed and store a document, overwriting any entry with the same content.

        Parameters
        ----------
        document:
            A :class:`Document` or bare text (stored without metadata).

        Returns
        -------
        VectorDocument
            The stored document and its vector.

        Raises
        ------
        memory_vector_store.utils.errors.InvalidVectorError
            If the parser does not return a sequence of numbers.
        Exception
            Whatever the caller's vector parser raises, unmodified.
        """

    @abstractmethod
    async def similarity_search(
        self,
        query: str,
        k: int = 4,
        filter: DocumentFilter | None = None,
    ) -> list[SearchResult[M]]:
        """Rank stored documents by cosine similarity to *query*.

        Parameters
        ----------
        query:
            The query text.  When it is itself a stored content key its
            stored vector is reused instead of calling the parser.
        k:
            Maximum number of results; ``k <= 0`` returns an empty list.
        filter:
            Optional predicate over :class:`Document`; only documents for
            which it returns ``True`` are ranked.

        Returns
        -------
        list[SearchResult]
            At most *k* results, highest score first; ties keep insertion order.
        """

    @abstractmethod
    async def remove(self, content: str) -> None:
        """Delete the entry keyed by *content*; no-op if absent."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""

    @abstractmethod
    def get_all(self) -> list[Document[M]]:
        """Return a snapshot of all stored documents in insertion order."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored documents."""

    @abstractmethod
    async def save(self) -> None:
        """Persist the current state if it has unsaved changes.

        Resolves once the (debounced) write has completed or failed.  Write
        failures are logged, never raised.
        """
