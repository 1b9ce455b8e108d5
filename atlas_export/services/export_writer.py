"""Persists an :class:`ExportPayload` as a pretty-printed JSON file."""

from __future__ import annotations

import json
import secrets
import time
from pathlib import Path

from atlas_export.models.export import ExportPayload
from atlas_export.utils.logging import get_logger

logger = get_logger(__name__)


class ExportWriter:
    """Writes ``<export_dir>/<prefix>-<epoch-ms>.json``.

    The directory is created on first use.  When a file with the computed
    name already exists a short random suffix is appended so two exports in
    the same millisecond never overwrite each other.
    """

    def __init__(self, export_dir: str | Path, filename_prefix: str) -> None:
        self._export_dir = Path(export_dir)
        self._prefix = filename_prefix

    @property
    def export_dir(self) -> Path:
        return self._export_dir

    def _target_path(self) -> Path:
        stem = f"{self._prefix}-{int(time.time() * 1000)}"
        path = self._export_dir / f"{stem}.json"
        while path.exists():
            path = self._export_dir / f"{stem}-{secrets.token_hex(3)}.json"
        return path

    def write(self, payload: ExportPayload) -> Path:
        self._export_dir.mkdir(parents=True, exist_ok=True)
        path = self._target_path()
        with open(path, "x", encoding="utf-8") as f:
            json.dump(payload.to_json_dict(), f, indent=2, ensure_ascii=False)

        logger.info(
            "export_written",
            file=str(path),
            parent_count=payload.parent_count,
            child_count=payload.child_count,
        )
        return path
