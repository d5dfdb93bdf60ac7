"""Configuration model for a single vector store instance."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

BYTES_PER_MB = 1024 * 1024


class VectorStoreOptions(BaseModel):
    """Per-index options.

    ``storage_path`` doubles as the sharing key: every index constructed with
    the same path in one process works on the same in-memory map.  An empty
    path disables persistence and sharing altogether.
    """

    model_config = ConfigDict(frozen=True)

    auto_save: bool = Field(default=True, description="Schedule a save after every mutation.")
    debug: bool = Field(default=False, description="Log verbose lifecycle events.")
    max_file_size_mb: float = Field(
        default=500,
        gt=0,
        description="Upper bound on the serialized snapshot size, in megabytes.",
    )
    storage_path: str | None = Field(
        default=None,
        description="File path or storage key of the snapshot; also the registry key.",
    )

    @property
    def max_file_size_bytes(self) -> float:
        return self.max_file_size_mb * BYTES_PER_MB

    def clamped(self, low: float, high: float) -> VectorStoreOptions:
        """Return a copy with ``max_file_size_mb`` clamped to ``[low, high]``."""
        return self.model_copy(
            update={"max_file_size_mb": max(min(self.max_file_size_mb, high), low)}
        )
