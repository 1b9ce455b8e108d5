"""API middleware - CORS, request correlation, and error handling.

# Starlette middleware is a stack (last added, first executed).  main.py
# adds ErrorHandlingMiddleware before RequestLoggingMiddleware, so request
# logging is outermost and records the status the error handler produced.
#
# RequestLoggingMiddleware binds ``request_id`` into structlog's context
# vars for the whole request, so every ``export_*`` and ``*_page_fetched``
# line of one export carries the same id as its ``http_request`` line.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from atlas_export.api.schemas import ErrorResponse
from atlas_export.utils.errors import AtlasExportError, ErrorKind
from atlas_export.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# ErrorKind → HTTP status returned to API clients.
STATUS_FOR_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.MALFORMED: 502,
    ErrorKind.UNREACHABLE: 504,
}


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Let browser tools call the export and browsing endpoints.

    The API only serves GET and POST.  Request bodies may carry Atlassian
    tokens, so cookies and other browser credentials are only accepted when
    *allowed_origins* names explicit origins (``CORS_ORIGINS``); with the
    ``*`` fallback they are refused.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one ``http_request`` line for it.

    A caller-supplied ``X-Request-ID`` is reused so exports can be traced
    across services; otherwise a fresh one is generated.  The id is echoed
    back on the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _logger.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            structlog.contextvars.unbind_contextvars("request_id")


def error_response(exc: AtlasExportError) -> JSONResponse:
    """Render *exc* as an :class:`ErrorResponse` with the status for its kind."""
    body = ErrorResponse(
        error=type(exc).__name__,
        kind=exc.kind.value,
        detail=str(exc),
        export_file=str(exc.export_file) if exc.export_file else None,
    )
    return JSONResponse(
        status_code=STATUS_FOR_KIND.get(exc.kind, 500),
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``AtlasExportError`` subclasses and return structured JSON errors.

    The status code follows the error's :class:`ErrorKind`; credentials and
    stack traces stay in the server log.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except AtlasExportError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                kind=exc.kind.value,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            return error_response(exc)
