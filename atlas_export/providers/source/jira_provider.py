"""Jira Cloud REST v3 source client.

* Parents - ``GET /rest/api/3/project/search`` with ``startAt``/``maxResults``
  offset paging; the body carries ``values``, ``total`` and ``isLast``.
* Children - ``POST /rest/api/3/search/jql`` with a JQL expression, an
  explicit field list and ``nextPageToken`` continuation paging.

The same two endpoints back the browsing reads: one page of the project
list, and a capped JQL preview.
"""

from __future__ import annotations

from typing import Any

from atlas_export.models.browse import PreviewItem, ProjectListing
from atlas_export.models.pagination import OffsetCursor, Page, PageCursor, TokenCursor
from atlas_export.models.records import ChildRecord, Credential, ParentRecord
from atlas_export.providers.source.base import (
    AtlassianSourceClient,
    escape_query_literal,
    extract_items,
    next_offset_cursor,
    next_token_cursor,
    reported_total,
)

PROJECT_SEARCH_PATH = "/rest/api/3/project/search"
ISSUE_SEARCH_PATH = "/rest/api/3/search/jql"

# Order matters: the first key holding a non-empty array wins.
_PROJECT_KEYS = ("values", "projects", "results", "items")
_ISSUE_KEYS = ("issues", "results", "values", "items")

ISSUE_FIELDS = ["id", "key", "summary", "status", "description", "created", "updated"]
PREVIEW_FIELDS = ["id", "key", "summary", "status"]


def build_project_jql(project_key: str) -> str:
    """JQL selecting a project's issues, newest activity first."""
    return f'project = "{escape_query_literal(project_key)}" ORDER BY updated DESC'


class JiraSourceClient(AtlassianSourceClient):
    """Pages through Jira projects and their issues."""

    source_name = "jira"

    async def fetch_parents(
        self,
        credential: Credential,
        cursor: OffsetCursor,
    ) -> Page[ParentRecord]:
        url = self._url(credential, PROJECT_SEARCH_PATH)
        payload = await self._get(
            credential,
            url,
            params={"startAt": cursor.start, "maxResults": cursor.size},
        )
        raw_items = extract_items(payload, _PROJECT_KEYS)
        parents = [ParentRecord.from_api(item) for item in raw_items]

        self._logger.debug(
            "jira_projects_page_fetched",
            start=cursor.start,
            returned=len(parents),
        )
        return Page[ParentRecord](
            items=parents,
            next=next_offset_cursor(cursor, len(raw_items), payload),
            total=reported_total(payload),
        )

    async def fetch_children(
        self,
        credential: Credential,
        parent_key: str,
        cursor: PageCursor,
        max_results: int,
    ) -> Page[ChildRecord]:
        url = self._url(credential, ISSUE_SEARCH_PATH)
        body: dict[str, Any] = {
            "jql": build_project_jql(parent_key),
            "maxResults": max_results,
            "fields": list(ISSUE_FIELDS),
        }
        if isinstance(cursor, TokenCursor) and cursor.value:
            body["nextPageToken"] = cursor.value

        payload = await self._post(credential, url, body)
        raw_items = extract_items(payload, _ISSUE_KEYS)
        issues = [ChildRecord.from_jira_issue(item) for item in raw_items]

        next_cursor = next_token_cursor(len(raw_items), payload)
        self._logger.debug(
            "jira_issues_page_fetched",
            project=parent_key,
            returned=len(issues),
            has_next=next_cursor is not None,
        )
        return Page[ChildRecord](
            items=issues,
            next=next_cursor,
            total=reported_total(payload),
        )

    def initial_child_cursor(self, page_size: int) -> PageCursor:
        return TokenCursor()

    # ------------------------------------------------------------------
    # Browsing reads
    # ------------------------------------------------------------------

    async def list_projects(
        self,
        credential: Credential,
        start_at: int,
        limit: int,
    ) -> ProjectListing:
        """Fetch exactly one page of the project list."""
        cursor = OffsetCursor(start=start_at, size=limit)
        page = await self.fetch_parents(credential, cursor)
        return ProjectListing(
            start_at=start_at,
            limit=limit,
            total=page.total,
            is_last=page.next is None,
            projects=page.items,
        )

    async def preview(self, credential: Credential, jql: str, limit: int) -> list[PreviewItem]:
        """Run *jql* once and return at most *limit* issues as flat rows."""
        url = self._url(credential, ISSUE_SEARCH_PATH)
        body = {"jql": jql, "maxResults": limit, "fields": list(PREVIEW_FIELDS)}
        payload = await self._post(credential, url, body)

        items = [
            _preview_item(raw) for raw in extract_items(payload, _ISSUE_KEYS)[:limit]
        ]
        self._logger.info("jira_preview_fetched", returned=len(items), limit=limit)
        return items


def _preview_item(raw: dict[str, Any]) -> PreviewItem:
    issue = ChildRecord.from_jira_issue(raw)
    status = issue.fields.get("status")
    summary = issue.fields.get("summary")
    return PreviewItem(
        id=issue.id,
        key=issue.key,
        summary=summary if isinstance(summary, str) else "",
        status=_status_name(status),
    )


def _status_name(status: Any) -> str:
    name = status.get("name") if isinstance(status, dict) else None
    return name if isinstance(name, str) else ""
