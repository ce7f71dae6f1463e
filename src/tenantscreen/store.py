"""Persistence of canonical reports keyed by applicant."""

from __future__ import annotations

import json
import os
import threading
import uuid
from pathlib import Path
from typing import Protocol, runtime_checkable

from .schemas import ScreeningReport


@runtime_checkable
class ReportStore(Protocol):
    """Lookup and storage of one report per applicant identity."""

    def get(self, applicant_id: str) -> ScreeningReport | None:
        """Return the stored report for ``applicant_id`` if any."""

    def put(self, applicant_id: str, report: ScreeningReport) -> None:
        """Store the report for ``applicant_id``."""


class InMemoryReportStore:
    def __init__(self) -> None:
        self._reports: dict[str, ScreeningReport] = {}
        self._lock = threading.Lock()

    def get(self, applicant_id: str) -> ScreeningReport | None:
        with self._lock:
            return self._reports.get(applicant_id)

    def put(self, applicant_id: str, report: ScreeningReport) -> None:
        with self._lock:
            self._reports[applicant_id] = report


class JsonFileReportStore:
    """Single JSON document mapping applicant ids to reports."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    def get(self, applicant_id: str) -> ScreeningReport | None:
        with self._lock:
            raw = self._read().get(applicant_id)
        if raw is None:
            return None
        return ScreeningReport.model_validate(raw)

    def put(self, applicant_id: str, report: ScreeningReport) -> None:
        with self._lock:
            data = self._read()
            data[applicant_id] = report.model_dump(mode="json")
            self._write(data)

    def _write(self, data: dict) -> None:
        # Readers only ever see a complete document.
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + f".tmp.{uuid.uuid4().hex}")
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def _read(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid report store {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Invalid report store {self._path}: expected a JSON object")
        return data


__all__ = ["InMemoryReportStore", "JsonFileReportStore", "ReportStore"]
