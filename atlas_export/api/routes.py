"""FastAPI routes for the atlasExport service.

# Endpoint                          Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/{source}/export           POST    Run one export (jira | confluence)
# /api/v1/jira/projects             GET     One page of Jira projects
# /api/v1/jira/projects             POST    Same, with credentials in the body
# /api/v1/jira/preview              POST    First few issues matching a JQL query
#
# Coordinators and the Jira browser are built once at startup (main.py's
# _build_all) and stored on ``app.state``.  Typed export errors propagate to
# ErrorHandlingMiddleware, which maps them to status codes.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from atlas_export.api.schemas import (
    ErrorResponse,
    ExportResponse,
    PreviewResponse,
    ProjectListResponse,
)
from atlas_export.models.browse import (
    DEFAULT_PROJECT_LIST_LIMIT,
    MAX_PROJECT_LIST_LIMIT,
    JiraPreviewRequest,
    ProjectListRequest,
)
from atlas_export.models.export import ExportRequest
from atlas_export.services.export_coordinator import ExportCoordinator
from atlas_export.services.jira_browser import JiraBrowser
from atlas_export.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

_UPSTREAM_ERRORS = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def _get_coordinators(request: Request) -> dict[str, ExportCoordinator]:
    """Return the source → coordinator map from application state."""
    return getattr(request.app.state, "coordinators", {})


def _get_jira_browser(request: Request) -> JiraBrowser:
    browser = getattr(request.app.state, "jira_browser", None)
    if browser is None:
        raise HTTPException(status_code=404, detail="Jira browsing is not enabled")
    return browser


CoordinatorsDep = Annotated[dict[str, ExportCoordinator], Depends(_get_coordinators)]
JiraBrowserDep = Annotated[JiraBrowser, Depends(_get_jira_browser)]


@router.post(
    "/{source}/export",
    response_model=ExportResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={**_UPSTREAM_ERRORS, 404: {"model": ErrorResponse}},
    summary="Export parents and their children from a source system",
)
async def export_source(
    source: str,
    coordinators: CoordinatorsDep,
    body: Annotated[ExportRequest | None, Body()] = None,
) -> ExportResponse:
    """Run a quota-bounded export and return where the file was written."""
    coordinator = coordinators.get(source.lower())
    if coordinator is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown source: {source}. Supported: {', '.join(sorted(coordinators))}",
        )

    request = body or ExportRequest()
    _logger.info(
        "export_requested",
        source=coordinator.source_name,
        limit=request.limit,
        credential_override=request.has_credential_overrides(),
    )
    summary = await coordinator.run(request)
    return ExportResponse.from_summary(summary)


@router.get(
    "/jira/projects",
    response_model=ProjectListResponse,
    response_model_by_alias=True,
    responses=_UPSTREAM_ERRORS,
    summary="List one page of Jira projects using the configured credentials",
)
async def list_jira_projects(
    browser: JiraBrowserDep,
    start_at: Annotated[int, Query(alias="startAt", ge=0)] = 0,
    limit: Annotated[
        int, Query(ge=1, le=MAX_PROJECT_LIST_LIMIT)
    ] = DEFAULT_PROJECT_LIST_LIMIT,
) -> ProjectListResponse:
    listing = await browser.list_projects(ProjectListRequest(start_at=start_at, limit=limit))
    return ProjectListResponse.from_listing(listing)


@router.post(
    "/jira/projects",
    response_model=ProjectListResponse,
    response_model_by_alias=True,
    responses=_UPSTREAM_ERRORS,
    summary="List one page of Jira projects, optionally with per-request credentials",
)
async def list_jira_projects_with_body(
    browser: JiraBrowserDep,
    body: Annotated[ProjectListRequest | None, Body()] = None,
) -> ProjectListResponse:
    listing = await browser.list_projects(body or ProjectListRequest())
    return ProjectListResponse.from_listing(listing)


@router.post(
    "/jira/preview",
    response_model=PreviewResponse,
    responses=_UPSTREAM_ERRORS,
    summary="Preview the first issues matching a JQL query",
)
async def preview_jira_issues(
    browser: JiraBrowserDep,
    body: Annotated[JiraPreviewRequest | None, Body()] = None,
) -> PreviewResponse:
    """Return at most ``limit`` issues as flat id/key/summary/status rows."""
    items = await browser.preview(body or JiraPreviewRequest())
    return PreviewResponse.from_items(items)
