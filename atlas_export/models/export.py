"""Export request, state and result models.

``ExportPayload`` is the exact document persisted by
:class:`~atlas_export.services.export_writer.ExportWriter`; it serialises
with camelCase keys (``exportedAt``, ``parentCount`` …) via ``by_alias``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from atlas_export.models.records import ChildRecord, CredentialOverrides, ParentRecord
from atlas_export.utils.defaults import to_bool

EXPORT_LIMIT_MAX = 2_000
DEFAULT_CHILD_BATCH_SIZE = 100
MAX_CHILD_BATCH_SIZE = 100
DEFAULT_PARENT_BATCH_SIZE = 50
MAX_PARENT_BATCH_SIZE = 1_000


class ExportPhase(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """States of one export call.

    INIT → FETCH_PARENTS → FETCH_CHILDREN → ACCUMULATE → (next page / next
    parent) → FINALIZE → DONE.  FAILED is reachable from any state.
    """

    INIT = "INIT"
    FETCH_PARENTS = "FETCH_PARENTS"
    FETCH_CHILDREN = "FETCH_CHILDREN"
    ACCUMULATE = "ACCUMULATE"
    FINALIZE = "FINALIZE"
    VECTORIZE = "VECTORIZE"
    DONE = "DONE"
    FAILED = "FAILED"


class ExportRequest(CredentialOverrides):
    """Caller-supplied parameters for one export call.

    The inherited ``base_url``/``email``/``api_key`` fields override the
    configured credential for this call only.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    limit: int = Field(default=EXPORT_LIMIT_MAX, ge=1, le=EXPORT_LIMIT_MAX)
    child_batch_size: int = Field(
        default=DEFAULT_CHILD_BATCH_SIZE, ge=1, le=MAX_CHILD_BATCH_SIZE
    )
    parent_batch_size: int = Field(
        default=DEFAULT_PARENT_BATCH_SIZE, ge=1, le=MAX_PARENT_BATCH_SIZE
    )
    vectorize: bool = False
    namespace: str | None = Field(default=None, min_length=1, max_length=64)

    @field_validator("vectorize", mode="before")
    @classmethod
    def _coerce_vectorize(cls, value: Any) -> bool:
        return to_bool(value, default=False)


class QuotaState(BaseModel):
    """Snapshot of the global child-record budget."""

    model_config = ConfigDict(frozen=True)

    global_limit: int
    remaining: int
    truncated: bool = False

    @property
    def consumed(self) -> int:
        return self.global_limit - self.remaining


class ParentGroup(BaseModel):
    """One parent and the children collected for it."""

    model_config = ConfigDict(frozen=True)

    parent: ParentRecord
    children: list[ChildRecord] = Field(default_factory=list)


class ExportPayload(BaseModel):
    """The persisted export document."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    exported_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    source: str
    parent_count: int
    child_count: int
    limit: int
    truncated: bool
    parents: list[ParentGroup] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class VectorizationSummary(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    namespace: str
    vector_count: int = 0


class ExportSummary(BaseModel):
    """Result returned to the trigger surface after a successful export."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    source: str
    parent_count: int
    child_count: int
    limit: int
    truncated: bool
    file: str
    vectorization: VectorizationSummary | None = None
