"""Abstract base class for vector-index upsert clients.

Only the write path is needed by the export pipeline: one upsert call per
embedding batch into a caller-chosen namespace.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from atlas_export.models.vector import EmbeddingVector


# Concrete implementation: PineconeVectorStore (atlas_export/providers/vector_store/)
# Could be swapped for Qdrant or Weaviate via this interface.
class IVectorStoreProvider(ABC):
    """Contract for namespaced vector upserts."""

    @abstractmethod
    async def upsert(self, vectors: list[EmbeddingVector], namespace: str) -> int:
        """Write *vectors* into *namespace* with a single request.

        Returns
        -------
        int
            The number of vectors the index reports as upserted.

        Raises
        ------
        atlas_export.utils.errors.UpstreamError
            On a non-success response.
        atlas_export.utils.errors.UpstreamUnreachableError
            On transport failure.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"pinecone"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the index host and key are configured."""
