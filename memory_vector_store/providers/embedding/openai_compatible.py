"""Shared client logic for endpoints that speak the OpenAI embeddings API.

OpenAI itself, TogetherAI/Anyscale/Fireworks and a local Ollama server all
accept the same ``embeddings.create`` call; only the client construction,
batch limit and availability probe differ.  Subclasses implement
:meth:`_create_client`; the client is built on first request, so an
unconfigured provider can still be constructed and asked ``is_available()``.
"""

from __future__ import annotations

import openai
import structlog

from memory_vector_store.interfaces.embedding_provider import IEmbeddingProvider
from memory_vector_store.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)


class OpenAICompatibleEmbeddingProvider(IEmbeddingProvider):
    """Batching embedding client over an ``openai.AsyncOpenAI`` instance.

    Parameters
    ----------
    model:
        Embedding model name sent with every request.
    dimension:
        Vector length the model produces.
    provider_name:
        Identifier used in logs and in raised :class:`EmbeddingError`.
    """

    batch_limit: int = 2048

    def __init__(self, model: str, dimension: int, provider_name: str) -> None:
        self._model = model
        self._dimension = dimension
        self._provider_name = provider_name
        self._client: openai.AsyncOpenAI | None = None

    def _create_client(self) -> openai.AsyncOpenAI:
        """Build the async client with base URL and key applied."""
        raise NotImplementedError

    @property
    def client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    async def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        client = self.client
        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_limit):
            batch = texts[start : start + self.batch_limit]
            try:
                response = await client.embeddings.create(input=batch, model=self._model)
            except openai.APIError as exc:
                raise EmbeddingError(
                    message=f"Embedding request to {self._model} failed: {exc}",
                    provider_name=self._provider_name,
                ) from exc

            vectors.extend(item.embedding for item in response.data)
            logger.debug(
                "embedding_batch_completed",
                provider=self._provider_name,
                model=self._model,
                batch_size=len(batch),
                tokens=response.usage.total_tokens if response.usage else None,
            )

        if len(vectors) != len(texts):
            raise EmbeddingError(
                message=f"Expected {len(texts)} embeddings, received {len(vectors)}",
                provider_name=self._provider_name,
            )
        return vectors

    async def embed_single(self, text: str) -> list[float]:
        vectors = await self.embed([text])
        return vectors[0]

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return self._provider_name
