"""Pydantic models for pagination, source records, exports, browsing and vectors."""

from atlas_export.models.browse import (
    JiraPreviewRequest,
    PreviewItem,
    ProjectListing,
    ProjectListRequest,
)
from atlas_export.models.export import (
    ExportPayload,
    ExportPhase,
    ExportRequest,
    ExportSummary,
    ParentGroup,
    QuotaState,
    VectorizationSummary,
)
from atlas_export.models.pagination import OffsetCursor, Page, PageCursor, TokenCursor
from atlas_export.models.records import (
    ChildRecord,
    Credential,
    CredentialOverrides,
    ParentRecord,
)
from atlas_export.models.vector import Document, EmbeddingVector

__all__ = [
    "ChildRecord",
    "Credential",
    "CredentialOverrides",
    "Document",
    "EmbeddingVector",
    "ExportPayload",
    "ExportPhase",
    "ExportRequest",
    "ExportSummary",
    "JiraPreviewRequest",
    "OffsetCursor",
    "Page",
    "PageCursor",
    "PreviewItem",
    "ProjectListRequest",
    "ProjectListing",
    "ParentGroup",
    "ParentRecord",
    "QuotaState",
    "TokenCursor",
    "VectorizationSummary",
]
