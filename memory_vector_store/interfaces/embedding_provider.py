"""Abstract base class for text-embedding service providers.

The vector store never computes embeddings itself: callers hand it a vector
parser, any callable mapping text to a sequence of floats (optionally
awaitable).  Providers implementing this interface are ready-made parsers
for common embedding APIs: an instance can be passed wherever a parser is
expected because ``__call__`` delegates to :meth:`embed_single`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence

# Anything the vector store accepts as a parser.
VectorParser = Callable[[str], Sequence[float] | Awaitable[Sequence[float]]]


# Concrete implementations (memory_vector_store/providers/embedding/):
#   OpenAIEmbeddingProvider  - text-embedding-3-small or any OpenAI-compatible API
#   NomicEmbeddingProvider   - nomic-embed-text via a local Ollama server
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services usable as vector parsers."""

    async def __call__(self, text: str) -> list[float]:
        return await self.embed_single(text)

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts.

        Parameters
        ----------
        texts:
            One or more text strings to embed.  Implementations handle
            batching internally if the underlying API has a per-call limit.

        Returns
        -------
        list[list[float]]
            Embedding vectors corresponding positionally to *texts*.

        Raises
        ------
        memory_vector_store.utils.errors.EmbeddingError
            If the embedding API call fails.
        """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string."""

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the embedding vectors.

        One store should only ever hold vectors from one model; mixing
        dimensions makes similarity scores meaningless.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"openai_embedding"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured and reachable."""
