"""Fixed-size batching of documents for the embedding provider.

Batches exist only to respect provider request-size limits.  Each batch is
embedded with exactly one provider call and the vectors are zipped back to
their documents by position.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from atlas_export.interfaces.embedding_provider import IEmbeddingProvider
from atlas_export.models.vector import Document, EmbeddingVector
from atlas_export.utils.errors import MalformedResponseError
from atlas_export.utils.logging import get_logger

DEFAULT_BATCH_SIZE = 20

logger = get_logger(__name__)


class EmbeddingBatcher:
    """Chunks documents and embeds one chunk per provider call."""

    def __init__(self, provider: IEmbeddingProvider, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._provider = provider
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def batches(self, documents: Sequence[Document]) -> Iterator[list[Document]]:
        for offset in range(0, len(documents), self._batch_size):
            yield list(documents[offset : offset + self._batch_size])

    async def embed_batch(self, batch: Sequence[Document]) -> list[EmbeddingVector]:
        """Embed one chunk; any count or dimension mismatch is fatal for the chunk."""
        provider_name = self._provider.get_provider_name()
        values = await self._provider.embed([document.text for document in batch])

        if len(values) != len(batch):
            raise MalformedResponseError(
                f"Expected {len(batch)} embeddings, received {len(values)}",
                provider_name=provider_name,
            )
        dimensions = {len(vector) for vector in values}
        if len(dimensions) > 1 or 0 in dimensions:
            raise MalformedResponseError(
                f"Embedding batch has inconsistent dimensions {sorted(dimensions)}",
                provider_name=provider_name,
            )

        logger.debug(
            "embedding_batch_complete",
            provider=provider_name,
            batch_size=len(batch),
            dimension=next(iter(dimensions), 0),
        )
        return [
            EmbeddingVector(id=document.id, values=vector, metadata=document.metadata)
            for document, vector in zip(batch, values)
        ]
