"""Embed-and-upsert stage run after an export file has been written.

Processes batches strictly in sequence: embed batch *n*, upsert batch *n*,
then move on.  The first failure aborts the remaining batches; batches
already upserted stay in the index.
"""

from __future__ import annotations

from collections.abc import Sequence

from atlas_export.interfaces.vector_store_provider import IVectorStoreProvider
from atlas_export.models.export import VectorizationSummary
from atlas_export.models.vector import Document
from atlas_export.services.embedding_batcher import EmbeddingBatcher
from atlas_export.utils.defaults import resolve_or_default
from atlas_export.utils.logging import get_logger

FALLBACK_NAMESPACE = "default"


class VectorizationService:
    """Runs :class:`EmbeddingBatcher` output through an :class:`IVectorStoreProvider`.

    Parameters
    ----------
    batcher:
        Chunks documents and obtains their embeddings.
    vector_store:
        Target index.
    default_namespace:
        Namespace used when a call does not name one.
    """

    def __init__(
        self,
        batcher: EmbeddingBatcher,
        vector_store: IVectorStoreProvider,
        default_namespace: str | None = None,
    ) -> None:
        self._batcher = batcher
        self._vector_store = vector_store
        self._default_namespace = resolve_or_default(default_namespace, FALLBACK_NAMESPACE)
        self._logger = get_logger(__name__)

    def resolve_namespace(self, namespace: str | None) -> str:
        return resolve_or_default(namespace, self._default_namespace)

    async def embed_and_upsert(
        self,
        documents: Sequence[Document],
        namespace: str | None = None,
    ) -> VectorizationSummary:
        target = self.resolve_namespace(namespace)
        total = 0

        for index, batch in enumerate(self._batcher.batches(documents)):
            vectors = await self._batcher.embed_batch(batch)
            upserted = await self._vector_store.upsert(vectors, target)
            total += upserted
            self._logger.info(
                "vectorization_batch_upserted",
                namespace=target,
                batch=index,
                batch_size=len(batch),
                upserted=upserted,
            )

        return VectorizationSummary(namespace=target, vector_count=total)
