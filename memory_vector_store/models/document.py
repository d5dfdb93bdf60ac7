"""Document and vector data models for the memory vector store.

Defines Pydantic v2 models for the values that flow through the index:
documents supplied by the caller, the embedding records kept in the backing
map, and the scored results returned by similarity search.  All models are
frozen; the index replaces records rather than mutating them.

Metadata is generic: ``Document[MyMeta]`` validates ``metadata`` as
``MyMeta``, while an unparametrised ``Document`` carries it as opaque data.
The index itself never inspects metadata contents, it only passes them
through.

Storage boundary
    At rest, each entry is a positional list ``[content, vector]`` or
    ``[content, vector, metadata]`` (see :data:`SerializedRecord`).  Lists
    rather than objects keep multi-megabyte snapshots compact.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python

M = TypeVar("M")

# [content, vector] or [content, vector, metadata]
SerializedRecord = list[Any]


# ---------------------------------------------------------------------------
# Document - the caller-facing unit stored in the index.
# ---------------------------------------------------------------------------
class Document(BaseModel, Generic[M]):
    """A piece of text plus optional caller-defined metadata.

    ``content`` is the unique key: two documents with identical content are
    the same entry in the index.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="The document text; unique key within an index.")
    metadata: M | None = Field(default=None, description="Opaque caller-defined metadata.")


# ---------------------------------------------------------------------------
# EmbeddingRecord - value type of the backing map, keyed by content.
# ---------------------------------------------------------------------------
class EmbeddingRecord(BaseModel, Generic[M]):
    """The vector and metadata snapshot stored for one content key."""

    model_config = ConfigDict(frozen=True)

    vector: list[float] = Field(description="Embedding produced by the vector parser.")
    metadata: M | None = Field(default=None, description="Metadata captured at insert time.")


class VectorDocument(Document[M], Generic[M]):
    """A document together with its embedding, as returned by ``add``."""

    vector: list[float] = Field(description="Embedding produced by the vector parser.")


# ---------------------------------------------------------------------------
# SearchResult - a scored match from similarity search.
# ---------------------------------------------------------------------------
class SearchResult(BaseModel, Generic[M]):
    """A stored document with its cosine similarity to the query."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Content of the matched document.")
    metadata: M | None = Field(default=None, description="Metadata of the matched document.")
    score: float = Field(
        default=0.0,
        ge=-1.0,
        le=1.0,
        description="Cosine similarity between the query and this document.",
    )


def doc(content: str, metadata: Any = None) -> Document:
    """Build a :class:`Document` from text and optional metadata.

    Example
    -------
    >>> await store.add(doc("Adidas Running Shoes", {"brand": "adidas"}))
    """
    return Document(content=content, metadata=metadata)


def serialize_record(content: str, record: EmbeddingRecord) -> SerializedRecord:
    """Convert a map entry to its positional, JSON-compatible storage form.

    Metadata that is not plain JSON (pydantic models, dates, ...) is
    converted with pydantic's encoder, so it reloads as plain data.
    """
    if record.metadata is None:
        return [content, list(record.vector)]
    return [content, list(record.vector), to_jsonable_python(record.metadata)]


def deserialize_record(item: SerializedRecord) -> tuple[str, EmbeddingRecord]:
    """Convert a positional storage entry back to ``(content, record)``.

    Raises
    ------
    ValueError
        If *item* is not a ``[content, vector, metadata?]`` list.
    """
    if not isinstance(item, (list, tuple)) or len(item) not in (2, 3):
        raise ValueError(f"Malformed snapshot entry: {item!r:.80}")
    content = item[0]
    if not isinstance(content, str):
        raise ValueError(f"Snapshot entry content must be a string, got {type(content).__name__}")
    metadata = item[2] if len(item) == 3 else None
    return content, EmbeddingRecord(vector=item[1], metadata=metadata)
