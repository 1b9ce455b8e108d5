"""Structure-tolerant text extraction for open record shapes.

Jira and Confluence payloads have no fixed schema: a status may be a bare
string or ``{"name": "Done"}``, a description may be plain text, HTML
storage format, or an Atlassian Document Format tree of ``content`` nodes.
:func:`extract_string` applies a small set of rules in priority order:

    1. plain string          -> returned as-is
    2. list                  -> each element extracted, empties dropped, joined by " "
    3. object with ``text``  -> recurse into ``text``
    4. object with ``content`` list -> recurse into each node, joined by " "
    5. object with ``name``  -> recurse into ``name`` (status-like shapes)
    6. anything else         -> ""

:func:`normalize_text` then strips markup and collapses whitespace.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_STYLE_BLOCK = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
_MARKUP_TAG = re.compile(r"<[^>]+>")
_WHITESPACE_RUN = re.compile(r"\s+")


def extract_string(value: Any) -> str:
    """Pull readable text out of *value* following the rules in the module docstring."""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = (extract_string(item) for item in value)
        return " ".join(part for part in parts if part)
    if isinstance(value, Mapping):
        if "text" in value:
            return extract_string(value["text"])
        content = value.get("content")
        if isinstance(content, list):
            return extract_string(content)
        if "name" in value:
            return extract_string(value["name"])
    return ""


def normalize_text(value: Any) -> str:
    """Extract text, drop script/style blocks and tags, collapse whitespace.

    Idempotent: ``normalize_text(normalize_text(x)) == normalize_text(x)``.
    """
    raw = extract_string(value)
    if not raw:
        return ""
    cleaned = _SCRIPT_BLOCK.sub(" ", raw)
    cleaned = _STYLE_BLOCK.sub(" ", cleaned)
    cleaned = _MARKUP_TAG.sub(" ", cleaned)
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()


def lookup_path(data: Mapping[str, Any] | None, path: str) -> Any:
    """Walk a dotted *path* (``"body.storage.value"``) through nested mappings.

    Returns ``None`` as soon as a segment is missing or not a mapping.
    """
    current: Any = data
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
    return current
