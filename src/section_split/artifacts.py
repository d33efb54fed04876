from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .contracts import Archive, ExportResult
from .data_access import sha256_bytes


def serialize_export_result(result: ExportResult) -> str:
    """
    Stable JSON serialization of an export run (no raw PDF bytes).
    """

    payload: dict[str, Any] = result.to_dict()
    if result.archive is not None:
        for entry, out in zip(result.archive.entries, payload["archive"]["entries"]):
            out["sha256"] = sha256_bytes(entry.payload)
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_export_report_json(*, result: ExportResult, out_report: Path) -> None:
    out_report.parent.mkdir(parents=True, exist_ok=True)
    out_report.write_text(serialize_export_result(result), encoding="utf-8")


def write_archive(*, archive: Archive, out_file: Path) -> Path:
    """
    Write the archive to `out_file` via a sibling temp file, so a reader never
    sees a half-written ZIP.
    """

    out_file.parent.mkdir(parents=True, exist_ok=True)
    tmp = out_file.with_name(out_file.name + ".part")
    tmp.write_bytes(archive.data)
    tmp.replace(out_file)
    return out_file
