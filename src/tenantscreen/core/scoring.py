"""Match scoring of a screening report against listing criteria."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from ..schemas import PublicSafetyMatch, ScreeningCriteria, ScreeningReport

MatchColor = Literal["green", "yellow", "red"]

PUBLIC_SAFETY_CATEGORY = "public_safety_match"
OVERRIDE_DETAIL = "Overridden: public-safety watchlist match"
FRAUD_PASS_MAX = 3


class ReportInvariantError(ValueError):
    """Raised when a report cannot be scored safely."""


@dataclass(slots=True, frozen=True)
class CategoryScore:
    passed: bool
    points: int
    max_points: int
    detail: str


@dataclass(slots=True, frozen=True)
class MatchResult:
    match_score: int
    match_breakdown: dict[str, CategoryScore]
    match_color: MatchColor
    total_points: int
    earned_points: int


class MatchScoreCalculator:
    """Pure scorer; holds only immutable weights and color thresholds."""

    DEFAULT_WEIGHTS: dict[str, int] = {
        "credit_score": 25,
        "evictions": 20,
        "bankruptcy": 20,
        "criminal": 20,
        "fraud": 15,
    }

    DEFAULT_THRESHOLDS: dict[str, int] = {
        "green": 80,
        "yellow": 60,
    }

    HARD_FAIL_POINTS = 100

    def __init__(
        self,
        *,
        weights: dict[str, int] | None = None,
        thresholds: dict[str, int] | None = None,
    ) -> None:
        merged_weights = self.DEFAULT_WEIGHTS.copy()
        merged_weights.update(weights or {})
        unknown = set(merged_weights) - set(self.DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown scoring categories: {sorted(unknown)}")
        merged_thresholds = self.DEFAULT_THRESHOLDS.copy()
        merged_thresholds.update(thresholds or {})
        self._weights = merged_weights
        self._thresholds = merged_thresholds

    def score(self, report: ScreeningReport, criteria: ScreeningCriteria) -> MatchResult:
        public_safety = report.public_safety_match
        if public_safety is None:
            raise ReportInvariantError("Report is missing its public-safety result")

        if public_safety.match_found:
            return self._hard_fail(public_safety)

        breakdown = {
            "credit_score": self._credit(report, criteria),
            "evictions": self._count_category(
                "evictions", criteria.no_evictions, report.evictions, "eviction(s)", "No evictions"
            ),
            "bankruptcy": self._count_category(
                "bankruptcy", criteria.no_bankruptcy, report.bankruptcies, "bankruptcy(ies)", "No bankruptcies"
            ),
            "criminal": self._count_category(
                "criminal", criteria.no_criminal, report.criminal_offenses, "offense(s)", "No criminal record"
            ),
            "fraud": self._fraud(report),
            PUBLIC_SAFETY_CATEGORY: CategoryScore(
                passed=True,
                points=0,
                max_points=0,
                detail=(
                    "Not on public-safety watchlist"
                    if public_safety.checked
                    else "Watchlist check unavailable"
                ),
            ),
        }

        total_points = sum(entry.max_points for entry in breakdown.values())
        earned_points = sum(entry.points for entry in breakdown.values())
        match_score = _round_half_up(100 * earned_points / total_points) if total_points else 100

        return MatchResult(
            match_score=match_score,
            match_breakdown=breakdown,
            match_color=self._color(match_score),
            total_points=total_points,
            earned_points=earned_points,
        )

    def _hard_fail(self, public_safety: PublicSafetyMatch) -> MatchResult:
        breakdown = {
            category: CategoryScore(passed=False, points=0, max_points=0, detail=OVERRIDE_DETAIL)
            for category in self._weights
        }
        breakdown[PUBLIC_SAFETY_CATEGORY] = CategoryScore(
            passed=False,
            points=0,
            max_points=self.HARD_FAIL_POINTS,
            detail=_watchlist_detail(public_safety),
        )
        return MatchResult(
            match_score=0,
            match_breakdown=breakdown,
            match_color="red",
            total_points=self.HARD_FAIL_POINTS,
            earned_points=0,
        )

    def _credit(self, report: ScreeningReport, criteria: ScreeningCriteria) -> CategoryScore:
        if criteria.min_credit_score <= 0:
            return CategoryScore(passed=True, points=0, max_points=0, detail="No minimum set")
        weight = self._weights["credit_score"]
        passed = report.credit_score >= criteria.min_credit_score
        return CategoryScore(
            passed=passed,
            points=weight if passed else 0,
            max_points=weight,
            detail=f"Score: {report.credit_score} (min: {criteria.min_credit_score})",
        )

    def _count_category(
        self,
        category: str,
        active: bool,
        count: int,
        noun: str,
        clean_detail: str,
    ) -> CategoryScore:
        if not active:
            return CategoryScore(passed=True, points=0, max_points=0, detail="Not required")
        weight = self._weights[category]
        passed = count == 0
        return CategoryScore(
            passed=passed,
            points=weight if passed else 0,
            max_points=weight,
            detail=clean_detail if passed else f"{count} {noun} found",
        )

    def _fraud(self, report: ScreeningReport) -> CategoryScore:
        risk = report.fraud_risk_score
        if risk is None:
            return CategoryScore(passed=True, points=0, max_points=0, detail="Not checked")
        weight = self._weights["fraud"]
        passed = risk <= FRAUD_PASS_MAX
        label = "Low" if passed else "High"
        return CategoryScore(
            passed=passed,
            points=weight if passed else 0,
            max_points=weight,
            detail=f"{label} fraud risk ({risk:g}/10)",
        )

    def _color(self, match_score: int) -> MatchColor:
        if match_score >= self._thresholds["green"]:
            return "green"
        if match_score >= self._thresholds["yellow"]:
            return "yellow"
        return "red"


def _watchlist_detail(public_safety: PublicSafetyMatch) -> str:
    count = public_safety.match_count or len(public_safety.crimes)
    detail = f"Public-safety watchlist match: {count} record(s) for '{public_safety.searched_name}'"
    descriptions = [crime.description or crime.name for crime in public_safety.crimes]
    descriptions = [text for text in descriptions if text]
    if descriptions:
        detail += ": " + "; ".join(descriptions)
    return detail


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


_DEFAULT_CALCULATOR = MatchScoreCalculator()


def score(report: ScreeningReport, criteria: ScreeningCriteria | None = None) -> MatchResult:
    """Score with the default weights and thresholds."""
    return _DEFAULT_CALCULATOR.score(report, criteria or ScreeningCriteria())


__all__ = [
    "CategoryScore",
    "MatchResult",
    "MatchScoreCalculator",
    "ReportInvariantError",
    "score",
]
