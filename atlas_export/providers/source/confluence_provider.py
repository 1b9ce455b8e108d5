"""Confluence Cloud REST source client.

Both levels use ``start``/``limit`` offset paging:

* Parents - ``GET /wiki/rest/api/space``
* Children - ``GET /wiki/rest/api/content?spaceKey=…&type=page&status=current``
  expanded with the storage body, version, history and space so the
  document projector has everything it needs without a second call.
"""

from __future__ import annotations

from atlas_export.models.pagination import OffsetCursor, Page, PageCursor
from atlas_export.models.records import ChildRecord, Credential, ParentRecord
from atlas_export.providers.source.base import (
    AtlassianSourceClient,
    extract_items,
    next_offset_cursor,
    reported_total,
)

SPACES_PATH = "/rest/api/space"
CONTENT_PATH = "/rest/api/content"
_WIKI_PREFIX = "/wiki"

_SPACE_KEYS = ("results", "spaces", "values", "items")
_CONTENT_KEYS = ("results", "pages", "values", "items")

CONTENT_EXPAND = "body.storage,version,history,space"


class ConfluenceSourceClient(AtlassianSourceClient):
    """Pages through Confluence spaces and their current pages."""

    source_name = "confluence"

    @staticmethod
    def _url(credential: Credential, path: str) -> str:
        # Sites are configured either as the bare site root or with /wiki.
        base = credential.base_url.rstrip("/")
        if not base.endswith(_WIKI_PREFIX):
            base = f"{base}{_WIKI_PREFIX}"
        return f"{base}{path}"

    async def fetch_parents(
        self,
        credential: Credential,
        cursor: OffsetCursor,
    ) -> Page[ParentRecord]:
        url = self._url(credential, SPACES_PATH)
        payload = await self._get(
            credential,
            url,
            params={"start": cursor.start, "limit": cursor.size},
        )
        raw_items = extract_items(payload, _SPACE_KEYS)
        spaces = [ParentRecord.from_api(item) for item in raw_items]

        self._logger.debug(
            "confluence_spaces_page_fetched",
            start=cursor.start,
            returned=len(spaces),
        )
        return Page[ParentRecord](
            items=spaces,
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
        start = cursor.start if isinstance(cursor, OffsetCursor) else 0
        request_cursor = OffsetCursor(start=start, size=max_results)

        url = self._url(credential, CONTENT_PATH)
        payload = await self._get(
            credential,
            url,
            params={
                "spaceKey": parent_key,
                "start": request_cursor.start,
                "limit": request_cursor.size,
                "expand": CONTENT_EXPAND,
                "type": "page",
                "status": "current",
            },
        )
        raw_items = extract_items(payload, _CONTENT_KEYS)
        pages = [ChildRecord.from_confluence_content(item) for item in raw_items]

        next_cursor = next_offset_cursor(request_cursor, len(raw_items), payload)
        self._logger.debug(
            "confluence_pages_page_fetched",
            space=parent_key,
            start=request_cursor.start,
            returned=len(pages),
            has_next=next_cursor is not None,
        )
        return Page[ChildRecord](
            items=pages,
            next=next_cursor,
            total=reported_total(payload),
        )

    def initial_child_cursor(self, page_size: int) -> PageCursor:
        return OffsetCursor(start=0, size=page_size)
