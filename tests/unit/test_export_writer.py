"""Unit tests for ExportWriter."""

from __future__ import annotations

import json
import re

from atlas_export.models.export import ExportPayload, ParentGroup
from atlas_export.models.records import ChildRecord, ParentRecord
from atlas_export.services.export_writer import ExportWriter


def _payload() -> ExportPayload:
    return ExportPayload(
        source="confluence",
        parent_count=1,
        child_count=1,
        limit=10,
        truncated=False,
        parents=[
            ParentGroup(
                parent=ParentRecord(id="2", key="ENG", name="Engineering"),
                children=[ChildRecord(id="501", fields={"title": "Runbook – ü"})],
            )
        ],
    )


def test_writes_prefixed_timestamped_file(export_dir) -> None:
    path = ExportWriter(export_dir, "confluence-spaces").write(_payload())

    assert path.parent == export_dir
    assert re.fullmatch(r"confluence-spaces-\d{13}\.json", path.name)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["source"] == "confluence"
    assert data["parentCount"] == 1
    assert data["parents"][0]["parent"] == {"id": "2", "key": "ENG", "name": "Engineering"}
    assert data["parents"][0]["children"][0]["fields"]["title"] == "Runbook – ü"


def test_output_is_indented(export_dir) -> None:
    path = ExportWriter(export_dir, "jira-issues").write(_payload())
    assert path.read_text(encoding="utf-8").startswith('{\n  "')


def test_same_millisecond_does_not_overwrite(export_dir, monkeypatch) -> None:
    monkeypatch.setattr("atlas_export.services.export_writer.time.time", lambda: 1_700_000_000.0)
    writer = ExportWriter(export_dir, "jira-issues")

    first = writer.write(_payload())
    second = writer.write(_payload())

    assert first != second
    assert first.name == "jira-issues-1700000000000.json"
    assert second.name.startswith("jira-issues-1700000000000-")
    assert len(list(export_dir.glob("*.json"))) == 2
