"""Custom exception hierarchy for atlasExport.

All application exceptions inherit from :class:`AtlasExportError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "jira", "openai_embedding", "pinecone") caused the
failure, plus a closed :class:`ErrorKind` so callers switch on the kind
instead of inspecting status fields.

The hierarchy is organized by failure domain:

    AtlasExportError  (base -- catch-all for any atlasExport error)
    +-- ConfigurationError          (missing/blank credential or setting)
    +-- UpstreamError               (non-success status from a remote API)
    |   +-- UpstreamUnauthorizedError   (401)
    |   +-- UpstreamForbiddenError      (403)
    |   +-- MalformedResponseError      (non-JSON or unparseable body)
    +-- UpstreamUnreachableError    (transport failure, including timeout)

Errors raised after an export file was already persisted carry the path in
``export_file`` so callers can tell "exported but not vectorized" apart from
a failure that left nothing behind.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Closed set of failure kinds produced by the HTTP-calling layer."""

    CONFIGURATION = "CONFIGURATION"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    UPSTREAM = "UPSTREAM"
    UNREACHABLE = "UNREACHABLE"
    MALFORMED = "MALFORMED"


class AtlasExportError(Exception):
    """Base exception for all atlasExport errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[jira] Invalid credentials``.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        self._export_file: Path | None = None
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def export_file(self) -> Path | None:
        """Path of the export persisted before this error was raised, if any."""
        return self._export_file

    def attach_export_file(self, path: Path) -> None:
        self._export_file = path

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(AtlasExportError):
    """Raised when a credential or required setting is missing or blank.

    Always raised before any network call is attempted.
    """

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Upstream (remote API) errors
# ---------------------------------------------------------------------------

class UpstreamError(AtlasExportError):
    """Raised when a remote API responds with a non-success status."""

    kind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str = "Upstream service returned an error",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status_code(self) -> int | None:
        return self._status_code


class UpstreamUnauthorizedError(UpstreamError):
    """Raised when the remote API rejects the credentials (401)."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Invalid credentials",
        provider_name: str | None = None,
        status_code: int | None = 401,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class UpstreamForbiddenError(UpstreamError):
    """Raised when the credentials lack access to the resource (403)."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Access forbidden",
        provider_name: str | None = None,
        status_code: int | None = 403,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class MalformedResponseError(UpstreamError):
    """Raised when a response body is not JSON or lacks the expected shape."""

    kind = ErrorKind.MALFORMED

    def __init__(
        self,
        message: str = "Malformed response body",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class UpstreamUnreachableError(AtlasExportError):
    """Raised on transport failure (DNS, connection refused, timeout)."""

    kind = ErrorKind.UNREACHABLE

    def __init__(
        self,
        message: str = "Upstream service is unreachable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


def error_for_status(
    status_code: int,
    message: str,
    provider_name: str | None = None,
) -> UpstreamError:
    """Build the typed error matching an HTTP *status_code*."""
    if status_code == 401:
        return UpstreamUnauthorizedError(message, provider_name=provider_name)
    if status_code == 403:
        return UpstreamForbiddenError(message, provider_name=provider_name)
    return UpstreamError(message, provider_name=provider_name, status_code=status_code)
