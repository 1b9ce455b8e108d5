# =============================================================================
# atlas_export/cli/export.py - One-shot export from the command line
# =============================================================================
#
# Runs the same ExportCoordinator the API uses, wired from the same Settings
# and config/config.yaml, then prints the summary as JSON.
#
# Usage examples:
#   python -m atlas_export.cli.export jira --limit 500
#   python -m atlas_export.cli.export confluence --vectorize --namespace docs
#
# Exit codes:
#   0 - export written (and vectorized, when requested)
#   1 - upstream failure; if the file was already written its path is printed
#   2 - configuration or argument error, nothing was fetched
# =============================================================================

"""Standalone CLI for running one export.

Usage::

    python -m atlas_export.cli.export jira --limit 500 --child-batch-size 50

    python -m atlas_export.cli.export confluence --vectorize --namespace docs
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx
from pydantic import ValidationError

from atlas_export.api.schemas import ExportResponse
from atlas_export.bootstrap import build_coordinators
from atlas_export.config.loader import load_config
from atlas_export.config.settings import Settings
from atlas_export.models.export import ExportRequest
from atlas_export.utils.errors import AtlasExportError, ConfigurationError
from atlas_export.utils.logging import configure_logging

SOURCES = ("jira", "confluence")

EXIT_OK = 0
EXIT_UPSTREAM = 1
EXIT_CONFIG = 2


def _build_request(args: argparse.Namespace, export_defaults: dict[str, Any]) -> ExportRequest:
    """Merge CLI flags over the ``export`` section of config.yaml."""
    values: dict[str, Any] = {
        "limit": export_defaults.get("limit"),
        "child_batch_size": export_defaults.get("child_batch_size"),
        "parent_batch_size": export_defaults.get("parent_batch_size"),
    }
    for name in ("limit", "child_batch_size", "parent_batch_size", "namespace"):
        value = getattr(args, name)
        if value is not None:
            values[name] = value
    values["vectorize"] = args.vectorize
    return ExportRequest(**{key: value for key, value in values.items() if value is not None})


def _print_error(exc: AtlasExportError) -> None:
    body = {"ok": False, "error": type(exc).__name__, "kind": exc.kind.value, "detail": str(exc)}
    if exc.export_file:
        body["file"] = str(exc.export_file)
    print(json.dumps(body, indent=2))


async def _run(args: argparse.Namespace, app_settings: Settings | None = None) -> int:
    """Build the coordinator for ``args.source`` and run one export."""
    app_settings = app_settings or Settings()
    configure_logging(app_settings.log_level, stream=sys.stderr)
    config = load_config(settings=app_settings)

    try:
        request = _build_request(args, config.get("export", {}))
    except ValidationError as exc:
        print(f"Invalid export options: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    async with httpx.AsyncClient(timeout=app_settings.http_timeout) as http_client:
        coordinators = build_coordinators(app_settings, http_client, config)
        try:
            summary = await coordinators[args.source].run(request)
        except ConfigurationError as exc:
            _print_error(exc)
            return EXIT_CONFIG
        except AtlasExportError as exc:
            _print_error(exc)
            return EXIT_UPSTREAM

    response = ExportResponse.from_summary(summary)
    print(json.dumps(response.model_dump(by_alias=True, exclude_none=True), indent=2))
    return EXIT_OK


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m atlas_export.cli.export",
        description=(
            "Export Jira projects/issues or Confluence spaces/pages to a JSON file, "
            "optionally upserting embeddings into the vector index."
        ),
    )
    parser.add_argument("source", choices=SOURCES, help="Source system to export from.")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of child records across all parents (1-2000).",
    )
    parser.add_argument(
        "--child-batch-size",
        type=int,
        default=None,
        help="Child records requested per page (1-100).",
    )
    parser.add_argument(
        "--parent-batch-size",
        type=int,
        default=None,
        help="Parents requested per page (1-1000).",
    )
    parser.add_argument(
        "--vectorize",
        action="store_true",
        help="Embed exported records and upsert them into the vector index.",
    )
    parser.add_argument(
        "--namespace",
        type=str,
        default=None,
        help="Vector index namespace (defaults to PINECONE_NAMESPACE).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the export, and exit with its status code."""
    args = _build_parser().parse_args(argv)
    exit_code = asyncio.run(_run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
