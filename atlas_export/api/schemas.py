"""Pydantic request/response schemas for the atlasExport API.

The request body is :class:`~atlas_export.models.export.ExportRequest`
itself; this module only adds the response envelopes.  Responses are
serialised with camelCase aliases (``parentCount``, ``childCount`` …).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from atlas_export.models.browse import PreviewItem, ProjectListing
from atlas_export.models.export import ExportSummary, VectorizationSummary
from atlas_export.models.records import ParentRecord


class ExportResponse(BaseModel):
    """Successful export result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    source: str
    file: str
    parent_count: int
    child_count: int
    limit: int
    truncated: bool
    vectorization: VectorizationSummary | None = None

    @classmethod
    def from_summary(cls, summary: ExportSummary) -> ExportResponse:
        return cls(
            source=summary.source,
            file=summary.file,
            parent_count=summary.parent_count,
            child_count=summary.child_count,
            limit=summary.limit,
            truncated=summary.truncated,
            vectorization=summary.vectorization,
        )


class ProjectListResponse(BaseModel):
    """One page of Jira projects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = True
    source: str = "jira"
    count: int
    total: int | None = None
    start_at: int
    limit: int
    is_last: bool
    projects: list[ParentRecord]

    @classmethod
    def from_listing(cls, listing: ProjectListing) -> ProjectListResponse:
        return cls(
            count=listing.count,
            total=listing.total,
            start_at=listing.start_at,
            limit=listing.limit,
            is_last=listing.is_last,
            projects=listing.projects,
        )


class PreviewResponse(BaseModel):
    """Flat rows from a capped JQL search."""

    count: int
    items: list[PreviewItem]

    @classmethod
    def from_items(cls, items: list[PreviewItem]) -> PreviewResponse:
        return cls(count=len(items), items=items)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error: str
    kind: str | None = None
    detail: str | None = None
    export_file: str | None = None
