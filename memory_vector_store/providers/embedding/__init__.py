"""Embedding provider implementations.

Both providers are async callables and can be handed to a store directly as
its vector parser:
    1. OpenAIEmbeddingProvider: text-embedding-3-small (1536 dims) or any
       OpenAI-compatible endpoint.  Requires an API key.
    2. NomicEmbeddingProvider: nomic-embed-text via Ollama (768 dims).
       Free and local, but requires a running Ollama server.
"""

from memory_vector_store.providers.embedding.nomic_embedding_provider import NomicEmbeddingProvider
from memory_vector_store.providers.embedding.openai_compatible import (
    OpenAICompatibleEmbeddingProvider,
)
from memory_vector_store.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = [
    "NomicEmbeddingProvider",
    "OpenAICompatibleEmbeddingProvider",
    "OpenAIEmbeddingProvider",
]
