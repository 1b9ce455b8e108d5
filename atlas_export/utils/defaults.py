"""Explicit default-resolution helpers.

Every "use this value, or fall back to that one" decision in the codebase
goes through these functions so the fallback rules are testable in one
place rather than scattered across ``or`` chains.
"""

from __future__ import annotations

import re
from typing import Any, TypeVar

T = TypeVar("T")

_SURROUNDING_QUOTES = re.compile(r"^['\"]|['\"]$")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def is_blank(value: Any) -> bool:
    """Return ``True`` for ``None`` and for strings that are empty after trimming."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def resolve_or_default(value: T | None, default: T) -> T:
    """Return *value* unless it is ``None`` or a blank string, else *default*."""
    if is_blank(value):
        return default
    return value  # type: ignore[return-value]


def normalize_env(value: Any) -> str | None:
    """Trim a raw configuration string and strip one pair of surrounding quotes.

    Returns ``None`` for non-strings and for values that end up empty.
    """
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    stripped = _SURROUNDING_QUOTES.sub("", trimmed).strip()
    return stripped or None


def to_bool(value: Any, default: bool = False) -> bool:
    """Coerce loose truthy inputs (``"yes"``, ``"1"``, ``True``) to ``bool``."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY
