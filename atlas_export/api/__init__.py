"""atlasExport API layer - routes, schemas, and middleware."""

from atlas_export.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from atlas_export.api.routes import router
from atlas_export.api.schemas import (
    ErrorResponse,
    ExportResponse,
    PreviewResponse,
    ProjectListResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "ExportResponse",
    "PreviewResponse",
    "ProjectListResponse",
]
