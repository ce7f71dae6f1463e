from __future__ import annotations

from pathlib import Path

import pytest

from tenantscreen import store as store_module
from tenantscreen.core import MatchScoreCalculator
from tenantscreen.pipeline import ScreeningService
from tenantscreen.schemas import ApplicantInfo, ScreeningCriteria
from tenantscreen.store import InMemoryReportStore, JsonFileReportStore, ReportStore

APPLICANT = ApplicantInfo(first_name="Jane", last_name="Doe", email="jane@example.test")
CRITERIA = ScreeningCriteria(min_credit_score=650, no_evictions=True)


class StubOrchestrator:
    def __init__(self, reports):
        self._reports = list(reports)
        self.calls = 0

    def produce_report(self, applicant):
        self.calls += 1
        return self._reports.pop(0)


def build_service(orchestrator, store=None) -> ScreeningService:
    return ScreeningService(
        orchestrator=orchestrator,
        store=store or InMemoryReportStore(),
        calculator=MatchScoreCalculator(),
    )


def test_second_request_reuses_stored_report(clean_report):
    orchestrator = StubOrchestrator([clean_report(credit_score=720)])
    service = build_service(orchestrator)

    first = service.get_or_create_report("A-1", APPLICANT)
    second = service.get_or_create_report("A-1", APPLICANT)

    assert orchestrator.calls == 1
    assert first is second


def test_reports_are_keyed_by_applicant(clean_report):
    orchestrator = StubOrchestrator([clean_report(credit_score=700), clean_report(credit_score=610)])
    service = build_service(orchestrator)

    service.get_or_create_report("A-1", APPLICANT)
    other = service.get_or_create_report("A-2", APPLICANT)

    assert orchestrator.calls == 2
    assert other.credit_score == 610


def test_zero_credit_score_is_not_reused(clean_report):
    store = InMemoryReportStore()
    store.put("A-1", clean_report(credit_score=0))
    orchestrator = StubOrchestrator([clean_report(credit_score=705)])
    service = build_service(orchestrator, store)

    assert service.find_reusable_report("A-1") is None
    report = service.get_or_create_report("A-1", APPLICANT)

    assert orchestrator.calls == 1
    assert report.credit_score == 705
    assert store.get("A-1").credit_score == 705


def test_screen_application_scores_and_flags_reuse(clean_report):
    orchestrator = StubOrchestrator([clean_report(evictions=1)])
    service = build_service(orchestrator)

    first = service.screen_application("A-1", APPLICANT, CRITERIA)
    second = service.screen_application("A-1", APPLICANT, CRITERIA)

    assert first.reused is False
    assert second.reused is True
    assert first.match.match_score == second.match.match_score
    assert first.match.match_breakdown["evictions"].passed is False
    assert first.match.total_points == 60
    assert first.match.earned_points == 40


def test_same_report_scores_differently_per_listing(clean_report):
    service = build_service(StubOrchestrator([clean_report(credit_score=640, fraud_risk_score=None)]))
    report = service.get_or_create_report("A-1", APPLICANT)

    strict = service.score(report, ScreeningCriteria(min_credit_score=700))
    lenient = service.score(report, ScreeningCriteria(min_credit_score=600))

    assert strict.match_score == 0
    assert lenient.match_score == 100


def test_stores_satisfy_protocol(tmp_path: Path):
    assert isinstance(InMemoryReportStore(), ReportStore)
    assert isinstance(JsonFileReportStore(tmp_path / "reports.json"), ReportStore)


def test_json_store_round_trips_across_instances(tmp_path: Path, clean_report):
    path = tmp_path / "nested" / "reports.json"
    report = clean_report(credit_score=731, source_request_ids={"credit": "req-1"})

    JsonFileReportStore(path).put("A-1", report)
    loaded = JsonFileReportStore(path).get("A-1")

    assert loaded == report
    assert JsonFileReportStore(path).get("missing") is None


def test_json_store_rejects_corrupt_file(tmp_path: Path):
    path = tmp_path / "reports.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonFileReportStore(path).get("A-1")


def test_json_store_keeps_previous_document_when_write_fails(tmp_path: Path, clean_report, monkeypatch):
    path = tmp_path / "reports.json"
    store = JsonFileReportStore(path)
    store.put("A-1", clean_report(credit_score=731))

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(store_module.os, "replace", failing_replace)
    with pytest.raises(OSError):
        store.put("A-2", clean_report(credit_score=640))

    assert store.get("A-1").credit_score == 731
    assert store.get("A-2") is None
    assert [entry.name for entry in tmp_path.iterdir()] == ["reports.json"]


class CountingStore(InMemoryReportStore):
    """Store whose entry appears right after the first lookup, as if another request wrote it."""

    def __init__(self, late_report):
        super().__init__()
        self._late_report = late_report
        self.reads = 0

    def get(self, applicant_id):
        self.reads += 1
        found = super().get(applicant_id)
        if self.reads == 1:
            super().put(applicant_id, self._late_report)
        return found


def test_screen_application_reads_store_once_and_flag_matches_report(clean_report):
    store = CountingStore(clean_report(credit_score=590))
    orchestrator = StubOrchestrator([clean_report(credit_score=720)])
    service = build_service(orchestrator, store)

    screening = service.screen_application("A-1", APPLICANT, CRITERIA)

    assert store.reads == 1
    assert screening.reused is False
    assert screening.report.credit_score == 720
    assert orchestrator.calls == 1


def test_resolve_report_flags_reuse(clean_report):
    service = build_service(StubOrchestrator([clean_report(credit_score=700)]))

    created, created_reused = service.resolve_report("A-1", APPLICANT)
    again, again_reused = service.resolve_report("A-1", APPLICANT)

    assert (created_reused, again_reused) == (False, True)
    assert again is created
