"""``nomic-embed-text`` served by a local Ollama server (free, no API key).

Ollama exposes an OpenAI-compatible ``/v1`` endpoint, so requests go through
the shared OpenAI-compatible client; reachability is probed on Ollama's own
``/api/tags`` route.
"""

from __future__ import annotations

import httpx
import openai

from memory_vector_store.config.settings import Settings
from memory_vector_store.providers.embedding.openai_compatible import (
    OpenAICompatibleEmbeddingProvider,
)

_NOMIC_DIMENSION = 768


class NomicEmbeddingProvider(OpenAICompatibleEmbeddingProvider):
    """768-dimensional embeddings from ``nomic-embed-text`` via Ollama."""

    batch_limit = 512

    def __init__(self, settings: Settings, model: str = "nomic-embed-text") -> None:
        self._base_url = settings.ollama_base_url.rstrip("/")
        super().__init__(model=model, dimension=_NOMIC_DIMENSION, provider_name="nomic_embedding")

    def _create_client(self) -> openai.AsyncOpenAI:
        # Ollama ignores the key, but the client refuses to start without one.
        return openai.AsyncOpenAI(base_url=f"{self._base_url}/v1", api_key="ollama")

    def is_available(self) -> bool:
        """Return ``True`` if the Ollama server answers on ``/api/tags``."""
        if not self._base_url:
            return False
        try:
            response = httpx.get(f"{self._base_url}/api/tags", timeout=3.0)
        except (httpx.ConnectError, httpx.TimeoutException):
            return False
        return response.status_code == 200
