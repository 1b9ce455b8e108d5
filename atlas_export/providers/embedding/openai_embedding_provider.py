"""OpenAI-compatible embedding provider adapter.

Wraps the ``openai`` async client to implement :class:`IEmbeddingProvider`.
Supports real OpenAI and OpenAI-compatible endpoints via a custom
``base_url``.  The SDK's own retry loop is disabled: one
:meth:`OpenAIEmbeddingProvider.embed` call is one HTTP request.
"""

from __future__ import annotations

import openai

from atlas_export.config.settings import Settings
from atlas_export.interfaces.embedding_provider import IEmbeddingProvider
from atlas_export.utils.errors import (
    MalformedResponseError,
    UpstreamUnreachableError,
    error_for_status,
)
from atlas_export.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"

# Known embedding model dimensions.
_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by an OpenAI-compatible embeddings API.

    Uses ``text-embedding-3-small`` (1536 dims) unless
    ``OPENAI_EMBEDDING_MODEL`` names another model.
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.openai_api_key

        client_kwargs: dict = {
            "api_key": self._api_key or "unset",
            "max_retries": 0,
            "timeout": settings.http_timeout,
        }
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)
        self._model = settings.openai_embedding_model or DEFAULT_EMBEDDING_MODEL
        self._dimension = _MODEL_DIMENSIONS.get(self._model, 0)
        self._provider_label = (
            "openai-compatible_embedding" if settings.openai_base_url else "openai_embedding"
        )

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed *texts* with a single ``embeddings.create`` call."""
        if not texts:
            return []

        try:
            response = await self._client.embeddings.create(input=texts, model=self._model)
        except openai.APIStatusError as exc:
            raise error_for_status(
                exc.status_code,
                f"OpenAI error: {exc.message}",
                provider_name=self._provider_label,
            ) from exc
        except openai.APIConnectionError as exc:
            raise UpstreamUnreachableError(
                f"Failed to reach {self._provider_label}: {exc}",
                provider_name=self._provider_label,
            ) from exc
        except openai.APIError as exc:
            raise MalformedResponseError(
                f"{self._provider_label} returned an unusable response: {exc}",
                provider_name=self._provider_label,
            ) from exc

        data = getattr(response, "data", None) or []
        vectors = [[float(value) for value in (item.embedding or [])] for item in data]
        if len(vectors) != len(texts) or any(not vector for vector in vectors):
            raise MalformedResponseError(
                f"{self._provider_label} returned {len(vectors)} embeddings for "
                f"{len(texts)} inputs",
                provider_name=self._provider_label,
            )

        usage = getattr(response, "usage", None)
        logger.info(
            "openai_embedding_batch",
            model=self._model,
            provider=self._provider_label,
            batch_size=len(texts),
            tokens=usage.total_tokens if usage else None,
        )
        return vectors

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return self._provider_label

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured."""
        return bool(self._api_key)
