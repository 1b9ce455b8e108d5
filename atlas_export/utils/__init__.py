"""Utility modules for atlasExport.

- **errors** -- Exception hierarchy rooted at AtlasExportError with a closed
  ErrorKind enumeration, plus ``error_for_status`` for HTTP status mapping.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **defaults** -- ``resolve_or_default``/``normalize_env``/``to_bool`` used
  wherever a value falls back to a default.
- **text_extraction** -- Rule-based text extraction for open Jira/Confluence
  field shapes and markup stripping.
- **http** (not re-exported here) -- JSON request helper that turns httpx
  failures into typed errors.
"""

from atlas_export.utils.defaults import normalize_env, resolve_or_default, to_bool
from atlas_export.utils.errors import (
    AtlasExportError,
    ConfigurationError,
    ErrorKind,
    MalformedResponseError,
    UpstreamError,
    UpstreamForbiddenError,
    UpstreamUnauthorizedError,
    UpstreamUnreachableError,
    error_for_status,
)
from atlas_export.utils.logging import configure_logging, get_logger
from atlas_export.utils.text_extraction import extract_string, lookup_path, normalize_text

__all__ = [
    "AtlasExportError",
    "ConfigurationError",
    "ErrorKind",
    "MalformedResponseError",
    "UpstreamError",
    "UpstreamForbiddenError",
    "UpstreamUnauthorizedError",
    "UpstreamUnreachableError",
    "configure_logging",
    "error_for_status",
    "extract_string",
    "get_logger",
    "lookup_path",
    "normalize_env",
    "normalize_text",
    "resolve_or_default",
    "to_bool",
]
