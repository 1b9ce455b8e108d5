"""Global child-record budget for one export call."""

from __future__ import annotations

from atlas_export.models.export import QuotaState


class QuotaTracker:
    """Counts accepted child records against a fixed limit.

    ``remaining`` never goes negative: :meth:`consume` accepts at most what
    is left and reports how many items it took.  A fresh tracker is built
    for every export call.
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self._limit = limit
        self._remaining = limit
        self._truncated = False

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def consumed(self) -> int:
        return self._limit - self._remaining

    @property
    def exhausted(self) -> bool:
        return self._remaining == 0

    @property
    def truncated(self) -> bool:
        return self._truncated

    def page_size(self, requested: int) -> int:
        """Clamp a requested page size to what the budget still allows."""
        return min(requested, self._remaining)

    def consume(self, available: int) -> int:
        """Take up to *available* items from the budget; return how many were taken."""
        accepted = min(max(available, 0), self._remaining)
        self._remaining -= accepted
        return accepted

    def mark_truncated(self) -> None:
        self._truncated = True

    def state(self) -> QuotaState:
        return QuotaState(
            global_limit=self._limit,
            remaining=self._remaining,
            truncated=self._truncated,
        )
