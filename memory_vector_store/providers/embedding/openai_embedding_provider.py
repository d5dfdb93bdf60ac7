"""OpenAI embedding provider.

Points at api.openai.com by default, or at any OpenAI-compatible host
(TogetherAI, Anyscale, Fireworks) when ``openai_base_url`` is set.  An
instance is itself a vector parser::

    store = create_vector_store(OpenAIEmbeddingProvider(Settings()))
"""

from __future__ import annotations

import openai

from memory_vector_store.config.settings import Settings
from memory_vector_store.providers.embedding.openai_compatible import (
    OpenAICompatibleEmbeddingProvider,
)
from memory_vector_store.utils.errors import EmbeddingError

_DEFAULT_MODEL = "text-embedding-3-small"

# Vector length per known model; unknown models are assumed to be 768-d.
_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
    "BAAI/bge-base-en-v1.5": 768,
    "BAAI/bge-large-en-v1.5": 1024,
}


class OpenAIEmbeddingProvider(OpenAICompatibleEmbeddingProvider):
    """Embeddings from OpenAI or an OpenAI-compatible host.  Requires an API key."""

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.openai_api_key
        self._base_url = settings.openai_base_url

        model = settings.openai_embedding_model or _DEFAULT_MODEL
        super().__init__(
            model=model,
            dimension=_MODEL_DIMENSIONS.get(model, 768),
            provider_name=(
                "openai-compatible_embedding" if self._base_url else "openai_embedding"
            ),
        )

    def _create_client(self) -> openai.AsyncOpenAI:
        if not self._api_key:
            raise EmbeddingError(
                message="No API key configured (set OPENAI_API_KEY)",
                provider_name=self.get_provider_name(),
            )
        client_kwargs: dict = {"api_key": self._api_key}
        if self._base_url:
            client_kwargs["base_url"] = self._base_url
        return openai.AsyncOpenAI(**client_kwargs)

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured."""
        return bool(self._api_key)
