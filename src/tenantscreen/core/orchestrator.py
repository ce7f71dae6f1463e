"""Screening orchestration across the provider checks."""

from __future__ import annotations

import random
from typing import Any, Callable, Iterable, Sequence

import pendulum
import structlog

from ..adapters.base import CheckOutcome, SandboxCheck
from ..adapters.watchlist import PublicSafetyWatchlistCheck
from ..schemas.report import (
    DEFAULT_CREDIT_SCORE,
    ApplicantInfo,
    PublicSafetyMatch,
    ScreeningReport,
)
from .context import ScreeningContext

Clock = Callable[[], pendulum.DateTime]

CHECK_DEFAULTS: dict[str, dict[str, Any]] = {
    "fraud": {"fraud_risk_score": 0.0},
    "identity": {"identity_verified": False},
    "credit": {"credit_score": DEFAULT_CREDIT_SCORE, "bankruptcies": 0},
    "criminal": {"criminal_offenses": 0},
    "eviction": {"evictions": 0},
}


def _utc_now() -> pendulum.DateTime:
    return pendulum.now("UTC")


def guard(
    check: str,
    call: Callable[[], CheckOutcome],
    *,
    logger: Any = None,
) -> CheckOutcome:
    """Run one check, converting any failure into a failed outcome."""
    try:
        return call()
    except Exception as exc:  # noqa: BLE001
        logger = logger or structlog.get_logger(__name__)
        logger.warning("screening.check_failed", check=check, error=str(exc))
        return CheckOutcome.failed(check, str(exc) or type(exc).__name__)


def fold_outcomes(
    outcomes: Iterable[CheckOutcome],
    *,
    searched_name: str,
    screened_at: str | None = None,
) -> ScreeningReport:
    """Merge check outcomes over the documented defaults."""
    fields: dict[str, Any] = {}
    for defaults in CHECK_DEFAULTS.values():
        fields.update(defaults)
    fields["public_safety_match"] = PublicSafetyMatch(searched_name=searched_name, checked=False)

    request_ids: dict[str, str] = {}
    for outcome in outcomes:
        if not outcome.ok:
            continue
        fields.update(outcome.fields)
        if outcome.request_id:
            request_ids[outcome.check] = outcome.request_id

    return ScreeningReport(
        **fields,
        source_request_ids=request_ids,
        source="provider",
        screened_at=screened_at,
    )


class SyntheticReportGenerator:
    """Plausible random reports used when the provider is unavailable."""

    CREDIT_SCORES: tuple[int, ...] = (580, 620, 650, 680, 700, 720, 740, 760, 780)

    def __init__(self, *, rng: random.Random | None = None, clock: Clock | None = None) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or _utc_now

    def generate(self, applicant: ApplicantInfo) -> ScreeningReport:
        rng = self._rng
        return ScreeningReport(
            credit_score=rng.choice(self.CREDIT_SCORES),
            evictions=rng.randint(1, 2) if rng.random() > 0.85 else 0,
            bankruptcies=1 if rng.random() > 0.90 else 0,
            criminal_offenses=rng.randint(1, 2) if rng.random() > 0.92 else 0,
            fraud_risk_score=float(rng.randint(0, 3)),
            identity_verified=rng.random() > 0.10,
            public_safety_match=PublicSafetyMatch(
                searched_name=applicant.full_name,
                checked=False,
            ),
            source_request_ids={},
            source="synthetic",
            screened_at=self._clock().to_iso8601_string(),
        )


class ScreeningOrchestrator:
    """Produce one canonical report per applicant.

    Sandbox checks run in the order given (fraud, identity, credit, criminal,
    eviction by default), followed by the public-safety lookup. Each check
    has its own failure boundary; a provider that is unconfigured or refuses
    login yields a synthetic report instead.
    """

    def __init__(
        self,
        *,
        context: ScreeningContext,
        checks: Sequence[SandboxCheck],
        watchlist: PublicSafetyWatchlistCheck | None,
        synthetic: SyntheticReportGenerator,
        clock: Clock | None = None,
    ) -> None:
        self._context = context
        self._checks = list(checks)
        self._watchlist = watchlist
        self._synthetic = synthetic
        self._clock = clock or _utc_now
        self._logger = structlog.get_logger(__name__)

    def produce_report(self, applicant: ApplicantInfo) -> ScreeningReport:
        credentials = self._context.credentials
        if not credentials.configured:
            self._logger.warning("screening.provider_unconfigured", fallback="synthetic")
            return self._synthetic.generate(applicant)

        credential = credentials.get_credential()
        if credential is None:
            self._logger.warning("screening.provider_unavailable", fallback="synthetic")
            return self._synthetic.generate(applicant)

        outcomes = [self._run_sandbox(check, credential) for check in self._checks]
        outcomes.append(self._run_watchlist(applicant))

        try:
            report = fold_outcomes(
                outcomes,
                searched_name=applicant.full_name,
                screened_at=self._clock().to_iso8601_string(),
            )
        except ValueError as exc:
            self._logger.error("screening.fold_failed", error=str(exc), fallback="synthetic")
            return self._synthetic.generate(applicant)

        self._logger.info(
            "screening.completed",
            checks=[outcome.check for outcome in outcomes],
            failed_checks=[outcome.check for outcome in outcomes if not outcome.ok],
            credit_score=report.credit_score,
            public_safety_match=report.public_safety_match.match_found,
        )
        return report

    def _run_sandbox(self, check: SandboxCheck, credential: str) -> CheckOutcome:
        identities = self._context.identities
        return guard(
            check.name,
            lambda: check.run(credential, identities.next_identity(check.name)),
            logger=self._logger,
        )

    def _run_watchlist(self, applicant: ApplicantInfo) -> CheckOutcome:
        if self._watchlist is None:
            return CheckOutcome(
                check="public_safety",
                fields={
                    "public_safety_match": PublicSafetyMatch(
                        searched_name=applicant.full_name,
                        checked=False,
                    )
                },
            )
        watchlist = self._watchlist
        return guard(watchlist.name, lambda: watchlist.run(applicant.full_name), logger=self._logger)


__all__ = [
    "CHECK_DEFAULTS",
    "ScreeningOrchestrator",
    "SyntheticReportGenerator",
    "fold_outcomes",
    "guard",
]
