"""Pagination models shared by every source backend.

Two cursor styles exist in the Atlassian APIs:

* :class:`OffsetCursor` - ``start``/``limit`` paging (Confluence spaces and
  content, Jira project search).  Advances by the number of items actually
  returned so successive ``start`` values strictly increase.
* :class:`TokenCursor` - opaque continuation tokens (Jira ``search/jql``).
  Advances by replacing the token with the one the server returned.

A :class:`Page` carries the items of one fetch plus the cursor for the next
fetch, or ``None`` when the source signalled end-of-data.
"""

from __future__ import annotations

from typing import Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class OffsetCursor(BaseModel):
    """Explicit ``start``/``size`` position."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(default=0, ge=0, description="Zero-based index of the first item.")
    size: int = Field(default=50, ge=1, description="Requested page size.")

    def advance(self, returned: int) -> OffsetCursor:
        """Return the cursor for the page after one that yielded *returned* items."""
        return OffsetCursor(start=self.start + returned, size=self.size)


class TokenCursor(BaseModel):
    """Opaque continuation token.  ``value=None`` means "first page"."""

    model_config = ConfigDict(frozen=True)

    value: str | None = Field(default=None, description="Server-issued continuation token.")


PageCursor = Union[OffsetCursor, TokenCursor]


class Page(BaseModel, Generic[T]):
    """One fetched page of items and the cursor for the next page."""

    model_config = ConfigDict(frozen=True)

    items: list[T] = Field(default_factory=list)
    next: OffsetCursor | TokenCursor | None = Field(
        default=None,
        description="Cursor for the following page; None once the source is exhausted.",
    )
    total: int | None = Field(
        default=None,
        description="Total item count reported by the source, when it reports one.",
    )

    @property
    def has_more(self) -> bool:
        return self.next is not None
