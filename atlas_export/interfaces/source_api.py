"""Abstract base class for paginated source-system clients.

A source system exposes a two-level hierarchy: parent collections (Jira
projects, Confluence spaces) and the child items inside each (issues,
pages).  Implementations perform exactly one page fetch per call and
normalise whatever response shape the backend returns into a
:class:`~atlas_export.models.pagination.Page`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from atlas_export.models.pagination import OffsetCursor, Page, PageCursor
from atlas_export.models.records import ChildRecord, Credential, ParentRecord


# Concrete implementations:
#   JiraSourceClient       - projects (offset) → issues (continuation token)
#   ConfluenceSourceClient - spaces (offset)   → pages (offset)
# Located in: atlas_export/providers/source/
class ISourceApiClient(ABC):
    """Contract for one-page-at-a-time fetches against a source REST API.

    Implementations must not raise on response-shape ambiguity: an
    unrecognised body yields an empty page.  Only transport failures and
    non-success statuses raise (see :mod:`atlas_export.utils.errors`).
    """

    @abstractmethod
    async def fetch_parents(
        self,
        credential: Credential,
        cursor: OffsetCursor,
    ) -> Page[ParentRecord]:
        """Fetch one page of parent collections.

        Parameters
        ----------
        credential:
            Resolved connection details for this export call.
        cursor:
            Offset position; ``cursor.size`` is the requested page size.

        Returns
        -------
        Page[ParentRecord]
            Parents on this page.  ``next`` is ``None`` when the backend
            reported the last page, the page came back short, or empty.
        """

    @abstractmethod
    async def fetch_children(
        self,
        credential: Credential,
        parent_key: str,
        cursor: PageCursor,
        max_results: int,
    ) -> Page[ChildRecord]:
        """Fetch one page of child items belonging to *parent_key*.

        Parameters
        ----------
        credential:
            Resolved connection details for this export call.
        parent_key:
            The parent's key.  Implementations embedding it into a query
            expression must escape it.
        cursor:
            Position returned by the previous page, or
            :meth:`initial_child_cursor` for the first page.
        max_results:
            Page size to request; the caller shrinks it as quota runs out.
        """

    @abstractmethod
    def initial_child_cursor(self, page_size: int) -> PageCursor:
        """Return the cursor that addresses the first page of children."""

    @abstractmethod
    def get_source_name(self) -> str:
        """Return the source identifier (``"jira"``, ``"confluence"``)."""
