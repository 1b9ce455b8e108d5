"""Child record → embeddable document projection.

Each source gets a fixed, ordered list of labelled parts.  Every part names
one or more candidate field paths; the first path that yields non-empty
text after :func:`~atlas_export.utils.text_extraction.normalize_text` wins.
Parts that come out empty contribute no line at all.

Jira issue::

    Project: Demo project
    Issue: DEMO-1
    Summary: Broken login
    Status: Done
    Description: Steps to reproduce ...
    Created: 2024-01-01T10:00:00.000+0000
    Updated: 2024-01-02T10:00:00.000+0000

Confluence page::

    Space: Engineering
    Title: Runbook
    Status: current
    Content: Restart the service ...
    Created: ...
    Updated: ...
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from atlas_export.models.export import ParentGroup
from atlas_export.models.records import ChildRecord, ParentRecord
from atlas_export.models.vector import MAX_DOCUMENT_CHARS, Document
from atlas_export.utils.text_extraction import lookup_path, normalize_text


@dataclass(frozen=True)
class _Part:
    label: str
    paths: tuple[str, ...]


_TITLE_PATHS = ("summary", "title")
_STATUS_PATHS = ("status",)
_BODY_PATHS = ("description", "body.storage.value", "body.view.value")
_CREATED_PATHS = ("created", "history.createdDate")
_UPDATED_PATHS = ("updated", "version.when")

# (parent label, record-key label, ordered field parts)
_LAYOUTS: dict[str, tuple[str, str, tuple[_Part, ...]]] = {
    "jira": (
        "Project",
        "Issue",
        (
            _Part("Summary", _TITLE_PATHS),
            _Part("Status", _STATUS_PATHS),
            _Part("Description", _BODY_PATHS),
            _Part("Created", _CREATED_PATHS),
            _Part("Updated", _UPDATED_PATHS),
        ),
    ),
    "confluence": (
        "Space",
        "Key",
        (
            _Part("Title", _TITLE_PATHS),
            _Part("Status", _STATUS_PATHS),
            _Part("Content", _BODY_PATHS),
            _Part("Created", _CREATED_PATHS),
            _Part("Updated", _UPDATED_PATHS),
        ),
    ),
}


def _first_text(record: ChildRecord, paths: Iterable[str]) -> str:
    for path in paths:
        text = normalize_text(lookup_path(record.fields, path))
        if text:
            return text
    return ""


class DocumentProjector:
    """Turns accumulated child records into :class:`Document` objects.

    Parameters
    ----------
    source:
        ``"jira"`` or ``"confluence"``; selects the label layout and is
        written into every document's ``metadata["source"]``.
    """

    def __init__(self, source: str) -> None:
        if source not in _LAYOUTS:
            raise ValueError(f"No document layout for source {source!r}")
        self._source = source
        self._parent_label, self._key_label, self._parts = _LAYOUTS[source]

    @property
    def source(self) -> str:
        return self._source

    def project(self, parent: ParentRecord, record: ChildRecord) -> Document:
        title = _first_text(record, _TITLE_PATHS)
        parts = [
            (self._parent_label, normalize_text(parent.label)),
            (self._key_label, normalize_text(record.key)),
        ]
        parts.extend((part.label, _first_text(record, part.paths)) for part in self._parts)
        text = "\n".join(f"{label}: {value}" for label, value in parts if value)

        document_id = record.id or str(uuid.uuid4())
        return Document(
            id=document_id,
            text=text[:MAX_DOCUMENT_CHARS],
            metadata={
                "source": self._source,
                "parentKey": parent.key,
                "parentName": parent.name,
                "recordId": document_id,
                "recordKey": record.key,
                "title": title or None,
            },
        )

    def project_all(self, groups: Iterable[ParentGroup]) -> list[Document]:
        return [
            self.project(group.parent, child)
            for group in groups
            for child in group.children
        ]
