"""Pinecone vector index adapter.

Talks to the index's data-plane host directly over httpx rather than through
the Pinecone SDK: the export pipeline needs a single endpoint
(``POST /vectors/upsert``) and the shared ``httpx.AsyncClient`` already
carries connection pooling and the error mapping in
:mod:`atlas_export.utils.http`.
"""

from __future__ import annotations

import httpx

from atlas_export.interfaces.vector_store_provider import IVectorStoreProvider
from atlas_export.models.vector import EmbeddingVector
from atlas_export.utils.http import send_json
from atlas_export.utils.logging import get_logger

logger = get_logger(__name__)

UPSERT_PATH = "/vectors/upsert"


class PineconeVectorStore(IVectorStoreProvider):
    """Namespaced upserts against one Pinecone index host.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient``.
    api_key:
        Pinecone API key, sent as the ``Api-Key`` header.
    base_url:
        Index host, e.g. ``https://my-index-abc123.svc.us-east1-gcp.pinecone.io``.
    timeout:
        Per-request timeout in seconds.
    """

    _PROVIDER_NAME = "pinecone"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def upsert(self, vectors: list[EmbeddingVector], namespace: str) -> int:
        if not vectors:
            return 0

        body = {
            "vectors": [vector.to_upsert_dict() for vector in vectors],
            "namespace": namespace,
        }
        payload = await send_json(
            self._http,
            "POST",
            f"{self._base_url}{UPSERT_PATH}",
            provider_name=self._PROVIDER_NAME,
            headers={
                "Api-Key": self._api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            json=body,
            timeout=self._timeout,
        )

        upserted = payload.get("upsertedCount") if isinstance(payload, dict) else None
        count = upserted if isinstance(upserted, int) else len(vectors)
        logger.debug("pinecone_upsert", namespace=namespace, upserted=count)
        return count

    def get_provider_name(self) -> str:
        return self._PROVIDER_NAME

    def is_available(self) -> bool:
        return bool(self._api_key and self._base_url)
