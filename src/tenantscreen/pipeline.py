"""Application screening flow: report reuse, scoring and output."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import pendulum
import structlog
from pydantic import ValidationError

from . import __version__
from .core import MatchResult, MatchScoreCalculator, ScreeningOrchestrator
from .schemas import ApplicantInfo, ListingCriteria, ScreeningCriteria, ScreeningReport
from .store import ReportStore


@dataclass(slots=True)
class ApplicationScreening:
    """Report and match for one application."""

    applicant_id: str
    report: ScreeningReport
    match: MatchResult
    reused: bool


class ScreeningService:
    """Entry point for the application-submission flow."""

    def __init__(
        self,
        *,
        orchestrator: ScreeningOrchestrator,
        store: ReportStore,
        calculator: MatchScoreCalculator,
    ) -> None:
        self._orchestrator = orchestrator
        self._store = store
        self._calculator = calculator
        self._logger = structlog.get_logger(__name__)

    def find_reusable_report(self, applicant_id: str) -> ScreeningReport | None:
        existing = self._store.get(applicant_id)
        if existing is not None and existing.credit_score > 0:
            return existing
        return None

    def get_or_create_report(self, applicant_id: str, applicant: ApplicantInfo) -> ScreeningReport:
        report, _ = self.resolve_report(applicant_id, applicant)
        return report

    def resolve_report(self, applicant_id: str, applicant: ApplicantInfo) -> tuple[ScreeningReport, bool]:
        """Return the applicant's report and whether it was reused.

        The store is read once, so the flag always describes the returned report.
        """
        existing = self.find_reusable_report(applicant_id)
        if existing is not None:
            self._logger.info("report.reused", applicant_id=applicant_id, source=existing.source)
            return existing, True

        report = self._orchestrator.produce_report(applicant)
        self._store.put(applicant_id, report)
        self._logger.info(
            "report.created",
            applicant_id=applicant_id,
            source=report.source,
            request_ids=report.source_request_ids,
        )
        return report, False

    def score(self, report: ScreeningReport, criteria: ScreeningCriteria) -> MatchResult:
        return self._calculator.score(report, criteria)

    def screen_application(
        self,
        applicant_id: str,
        applicant: ApplicantInfo,
        criteria: ScreeningCriteria,
    ) -> ApplicationScreening:
        report, reused = self.resolve_report(applicant_id, applicant)
        match = self.score(report, criteria)
        self._logger.info(
            "screening.result",
            applicant_id=applicant_id,
            match_score=match.match_score,
            match_color=match.match_color,
            reused=reused,
        )
        return ApplicationScreening(
            applicant_id=applicant_id,
            report=report,
            match=match,
            reused=reused,
        )


class ApplicantLoader:
    """Load an applicant document (``applicant_id`` plus identity fields)."""

    def load(self, path: Path) -> tuple[str, ApplicantInfo]:
        data = _read_json(path)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid applicant JSON in {path}: expected an object")
        applicant_id = data.get("applicant_id")
        if not applicant_id:
            raise ValueError(f"Invalid applicant JSON in {path}: missing applicant_id")
        try:
            applicant = ApplicantInfo.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid applicant JSON in {path}: {exc}") from exc
        return str(applicant_id), applicant


class ListingLoader:
    """Load one listing or a list of listings with their criteria."""

    def load(self, path: Path) -> list[ListingCriteria]:
        data = _read_json(path)
        records = data if isinstance(data, list) else [data]
        listings: list[ListingCriteria] = []
        for idx, record in enumerate(records, start=1):
            try:
                listings.append(ListingCriteria.model_validate(record))
            except ValidationError as exc:
                raise ValueError(f"Invalid listing #{idx} in {path}: {exc}") from exc
        return listings


class OutputWriter:
    """Persist screening results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class ScreeningPipeline:
    """Screen one applicant against one or more listings and write results."""

    def __init__(
        self,
        *,
        service: ScreeningService,
        applicant_loader: ApplicantLoader | None = None,
        listing_loader: ListingLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._service = service
        self._applicants = applicant_loader or ApplicantLoader()
        self._listings = listing_loader or ListingLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        applicant_path: Path,
        listings_path: Path,
        output_path: Path,
        audit_logger: AuditLogger | None = None,
    ) -> dict[str, Any]:
        applicant_id, applicant = self._applicants.load(applicant_path)
        listings = self._listings.load(listings_path)

        report, reused = self._service.resolve_report(applicant_id, applicant)

        results: list[dict[str, Any]] = []
        for listing in listings:
            match = self._service.score(report, listing.criteria)
            results.append({"listing_id": listing.listing_id, **serialize_match(match)})

            if audit_logger:
                audit_logger.append(
                    {
                        "applicant_id": applicant_id,
                        "listing_id": listing.listing_id,
                        "match_score": match.match_score,
                        "match_color": match.match_color,
                        "report_source": report.source,
                        "reused": reused,
                        "timestamp": pendulum.now("UTC").to_iso8601_string(),
                    }
                )

            self._logger.info(
                "screening.result",
                applicant_id=applicant_id,
                listing_id=listing.listing_id,
                match_score=match.match_score,
                match_color=match.match_color,
            )

        payload = {
            "metadata": {
                "applicant_id": applicant_id,
                "listing_count": len(listings),
                "reused": reused,
                "source": report.source,
                "timestamp": pendulum.now("UTC").to_iso8601_string(),
                "app_version": __version__,
            },
            "report": report.model_dump(mode="json"),
            "results": results,
        }
        self._writer.write(output_path, payload)
        return payload


def serialize_match(match: MatchResult) -> dict[str, Any]:
    return asdict(match)


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


__all__ = [
    "ApplicantLoader",
    "ApplicationScreening",
    "AuditLogger",
    "ListingLoader",
    "OutputWriter",
    "ScreeningPipeline",
    "ScreeningService",
    "serialize_match",
]
