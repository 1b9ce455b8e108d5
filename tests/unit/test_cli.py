"""Unit tests for the export CLI (atlas_export.cli.export)."""

from __future__ import annotations

import json
from argparse import Namespace
from unittest.mock import patch

import pytest

from atlas_export.cli.export import (
    EXIT_CONFIG,
    EXIT_OK,
    EXIT_UPSTREAM,
    _build_parser,
    _build_request,
    main,
)
from atlas_export.services.document_projector import DocumentProjector
from atlas_export.services.export_coordinator import ExportCoordinator
from atlas_export.services.export_writer import ExportWriter
from atlas_export.utils.errors import UpstreamForbiddenError


@pytest.fixture(autouse=True)
def _keep_test_logging(monkeypatch):
    """The CLI reroutes logging on startup; leave the test configuration alone."""
    monkeypatch.setattr("atlas_export.cli.export.configure_logging", lambda *a, **kw: None)


@pytest.fixture
def patched_coordinators(scripted_source, credential_provider, export_dir):
    """Factory that patches ``build_coordinators`` to serve a scripted source."""

    def _make(counts: dict[str, int], failures: dict[str, Exception] | None = None):
        coordinator = ExportCoordinator(
            source_client=scripted_source(counts, failures=failures),
            credential_provider=credential_provider,
            writer=ExportWriter(export_dir, "jira-issues"),
            projector=DocumentProjector("jira"),
        )
        return patch(
            "atlas_export.cli.export.build_coordinators",
            return_value={"jira": coordinator},
        )

    return _make


def _exit_code(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# ======================================================================
# Argument handling
# ======================================================================


class TestArguments:
    def test_parser_flags(self) -> None:
        args = _build_parser().parse_args(
            ["confluence", "--limit", "10", "--child-batch-size", "5", "--vectorize"]
        )
        assert args.source == "confluence"
        assert args.limit == 10
        assert args.child_batch_size == 5
        assert args.parent_batch_size is None
        assert args.vectorize is True

    def test_unknown_source_is_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["bitbucket"])
        assert exc_info.value.code == 2

    def test_flags_override_config_defaults(self) -> None:
        args = Namespace(
            limit=None, child_batch_size=10, parent_batch_size=None, namespace="docs", vectorize=True
        )
        request = _build_request(args, {"limit": 500, "child_batch_size": 100})
        assert request.limit == 500
        assert request.child_batch_size == 10
        assert request.parent_batch_size == 50
        assert request.namespace == "docs"
        assert request.vectorize is True


# ======================================================================
# Exit codes and output
# ======================================================================


class TestMain:
    def test_success_prints_summary(self, patched_coordinators, capsys) -> None:
        with patched_coordinators({"DEMO": 2}):
            code = _exit_code(["jira", "--limit", "1"])

        assert code == EXIT_OK
        output = json.loads(capsys.readouterr().out)
        assert output["ok"] is True
        assert output["childCount"] == 1
        assert output["truncated"] is True
        assert output["file"].endswith(".json")

    def test_upstream_failure_exits_1(self, patched_coordinators, capsys, export_dir) -> None:
        failure = UpstreamForbiddenError("Forbidden", provider_name="jira")
        with patched_coordinators({"DEMO": 2}, failures={"DEMO": failure}):
            code = _exit_code(["jira"])

        assert code == EXIT_UPSTREAM
        output = json.loads(capsys.readouterr().out)
        assert output["ok"] is False
        assert output["kind"] == "FORBIDDEN"
        assert "file" not in output
        assert not export_dir.exists()

    def test_vectorize_without_keys_exits_2(self, patched_coordinators, capsys) -> None:
        with patched_coordinators({"DEMO": 1}):
            code = _exit_code(["jira", "--vectorize"])

        assert code == EXIT_CONFIG
        assert json.loads(capsys.readouterr().out)["kind"] == "CONFIGURATION"

    def test_out_of_range_limit_exits_2(self, patched_coordinators, capsys) -> None:
        with patched_coordinators({"DEMO": 1}) as build:
            code = _exit_code(["jira", "--limit", "5000"])

        assert code == EXIT_CONFIG
        build.assert_not_called()
        assert "Invalid export options" in capsys.readouterr().err
