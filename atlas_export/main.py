"""atlasExport FastAPI application entry point.

Wires together the source clients, credential providers, export writer and
optional vectorization stage via constructor injection.  Loads
configuration from ``.env`` and ``config/config.yaml`` and configures
structured logging.

Component construction itself lives in :mod:`atlas_export.bootstrap` so the
CLI can reuse it without importing this module.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from atlas_export.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from atlas_export.api.routes import router as api_router
from atlas_export.bootstrap import build_coordinators, build_jira_browser
from atlas_export.config.loader import load_config
from atlas_export.config.settings import Settings
from atlas_export.utils.logging import configure_logging, get_logger

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every component stored on ``app.state``."""
    http_client = httpx.AsyncClient(timeout=app_settings.http_timeout)
    config = load_config(settings=app_settings)
    coordinators = build_coordinators(app_settings, http_client, config)
    return {
        "settings": app_settings,
        "config": config,
        "http_client": http_client,
        "coordinators": coordinators,
        "jira_browser": build_jira_browser(app_settings, http_client),
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build coordinators on startup, close the shared HTTP client on shutdown."""
    app_settings: Settings = getattr(application.state, "settings", None) or settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=__version__,
        environment=app_settings.app_env,
        sources=sorted(components["coordinators"]),
        vectorization=app_settings.vectorization_configured(),
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="atlasExport API",
        version=__version__,
        description=(
            "Export Jira projects and Confluence spaces with their issues and "
            "pages into a JSON file, optionally embedding them into a vector index."
        ),
        lifespan=_lifespan,
    )
    if app_settings is not None:
        application.state.settings = app_settings

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=(app_settings or settings).allowed_origins())

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "atlas_export.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
