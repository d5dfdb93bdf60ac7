"""Custom exception hierarchy for memory-vector-store.

All library exceptions inherit from :class:`MemoryVectorStoreError`, which
carries an optional ``provider_name`` so error handlers can identify which
adapter (e.g. "file_storage", "openai_embedding") caused the failure.

    MemoryVectorStoreError  (base -- catch-all for any library error)
    +-- InvalidVectorError  (parser returned something that is not a vector)
    +-- StorageError        (storage adapter could not read/write a snapshot)
    +-- EmbeddingError      (bundled embedding adapter API failure)
    +-- ConfigurationError  (invalid or missing configuration)

Failures of a caller-supplied vector parser are never wrapped: they reach
the caller of ``add`` / ``similarity_search`` exactly as raised.
"""


class MemoryVectorStoreError(Exception):
    """Base exception for all memory-vector-store errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[file_storage] Snapshot is not a JSON array``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Index errors
# ---------------------------------------------------------------------------

class InvalidVectorError(MemoryVectorStoreError):
    """Raised when the vector parser returns something other than a sequence of numbers."""

    def __init__(
        self,
        message: str = "Vector parser must return a sequence of numbers",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Adapter errors
# ---------------------------------------------------------------------------

class StorageError(MemoryVectorStoreError):
    """Raised when a storage adapter cannot read or write a snapshot."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmbeddingError(MemoryVectorStoreError):
    """Raised when an embedding adapter's API call fails."""

    def __init__(
        self,
        message: str = "Embedding API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(MemoryVectorStoreError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
