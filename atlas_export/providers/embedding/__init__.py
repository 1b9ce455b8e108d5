"""Embedding provider implementations.

Embeddings convert exported child records into numeric vectors that are
upserted into the vector index for semantic search.

    OpenAIEmbeddingProvider - text-embedding-3-small (1536 dims) by default.
        Works against OpenAI or any OpenAI-compatible endpoint
        (OPENAI_BASE_URL).
"""

from atlas_export.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OpenAIEmbeddingProvider"]
