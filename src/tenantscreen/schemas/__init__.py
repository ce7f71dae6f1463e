"""Pydantic schema definitions for reports, criteria and configuration."""

from __future__ import annotations

from .criteria import ListingCriteria, ScreeningCriteria
from .report import (
    DEFAULT_CREDIT_SCORE,
    ApplicantInfo,
    PublicSafetyMatch,
    ScreeningReport,
    WatchlistCrime,
)

__all__ = [
    "ApplicantInfo",
    "DEFAULT_CREDIT_SCORE",
    "ListingCriteria",
    "PublicSafetyMatch",
    "ScreeningCriteria",
    "ScreeningReport",
    "WatchlistCrime",
]
