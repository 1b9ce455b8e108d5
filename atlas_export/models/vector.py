"""Vectorization models: projected documents and their embeddings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Embedding providers reject inputs past roughly 8k tokens; characters are a
# conservative proxy.
MAX_DOCUMENT_CHARS = 8000


class Document(BaseModel):
    """A child record flattened into embeddable text plus traceable metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str = Field(max_length=MAX_DOCUMENT_CHARS)
    metadata: dict[str, Any] = Field(default_factory=dict)


class EmbeddingVector(BaseModel):
    """One embedded document, ready for upsert."""

    model_config = ConfigDict(frozen=True)

    id: str
    values: list[float]
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_upsert_dict(self) -> dict[str, Any]:
        """Wire shape for the upsert API; ``None`` metadata values are dropped."""
        metadata = {key: value for key, value in self.metadata.items() if value is not None}
        return {"id": self.id, "values": self.values, "metadata": metadata}
