"""Request and result models for the Jira browsing endpoints.

These are the light-weight reads that sit next to the export: one page of
the project list, and a short JQL preview used to check a query (and the
credentials) before committing to a full export.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from atlas_export.models.records import CredentialOverrides, ParentRecord

DEFAULT_PROJECT_LIST_LIMIT = 50
MAX_PROJECT_LIST_LIMIT = 1_000

DEFAULT_PREVIEW_JQL = "order by created desc"
DEFAULT_PREVIEW_LIMIT = 3
MAX_PREVIEW_LIMIT = 20


class ProjectListRequest(CredentialOverrides):
    """One page of ``GET /rest/api/3/project/search``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    start_at: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PROJECT_LIST_LIMIT, ge=1, le=MAX_PROJECT_LIST_LIMIT)


class ProjectListing(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    start_at: int
    limit: int
    total: int | None = None
    is_last: bool
    projects: list[ParentRecord] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.projects)


class JiraPreviewRequest(CredentialOverrides):
    """A capped JQL search returning only identity and status fields."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    jql: str = Field(default=DEFAULT_PREVIEW_JQL, min_length=1, max_length=5_000)
    limit: int = Field(default=DEFAULT_PREVIEW_LIMIT, ge=1, le=MAX_PREVIEW_LIMIT)


class PreviewItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    key: str | None = None
    summary: str = ""
    status: str = ""
