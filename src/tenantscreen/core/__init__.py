"""Core screening engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .context import ScreeningContext
from .extract import count_occurrences, find_first_value
from .identities import IdentityRotation
from .orchestrator import ScreeningOrchestrator, SyntheticReportGenerator
from .scoring import (
    CategoryScore,
    MatchResult,
    MatchScoreCalculator,
    ReportInvariantError,
    score,
)
from .session import SessionCredentialCache

__all__ = [
    "CategoryScore",
    "IdentityRotation",
    "MatchResult",
    "MatchScoreCalculator",
    "ReportInvariantError",
    "ScreeningContext",
    "ScreeningOrchestrator",
    "SessionCredentialCache",
    "SyntheticReportGenerator",
    "count_occurrences",
    "find_first_value",
    "score",
]
