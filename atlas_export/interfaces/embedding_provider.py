"""Abstract base class for text-embedding service providers.

Defines the contract for generating embedding vectors from text.  The
:class:`~atlas_export.services.embedding_batcher.EmbeddingBatcher` owns
request sizing, so implementations make exactly one upstream call per
:meth:`IEmbeddingProvider.embed` invocation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAIEmbeddingProvider (atlas_export/providers/embedding/)
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services used by the vectorization stage."""

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts in one call.

        Parameters
        ----------
        texts:
            Text strings to embed.

        Returns
        -------
        list[list[float]]
            Embedding vectors corresponding positionally to *texts*.

        Raises
        ------
        atlas_export.utils.errors.UpstreamError
            On a non-success response or a body that does not carry one
            vector per input.
        atlas_export.utils.errors.UpstreamUnreachableError
            On transport failure.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the expected dimensionality of the embedding vectors.

        Example values: ``1536`` (``text-embedding-3-small``).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"openai_embedding"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured (credentials present)."""
