"""Canonical screening report and applicant documents."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReportSource = Literal["provider", "synthetic"]

DEFAULT_CREDIT_SCORE = 680


class WatchlistCrime(BaseModel):
    """Descriptive fields copied from a public-safety watchlist entry."""

    name: str = ""
    description: str = ""
    subjects: list[str] = Field(default_factory=list)
    warning_message: str | None = None
    url: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class PublicSafetyMatch(BaseModel):
    """Outcome of the public-safety watchlist lookup.

    ``checked`` is False when the lookup could not be performed, so that a
    verified clear result can be told apart from an outage.
    """

    match_found: bool = False
    match_count: int = Field(default=0, ge=0)
    searched_name: str = ""
    crimes: list[WatchlistCrime] = Field(default_factory=list)
    checked: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class ScreeningReport(BaseModel):
    """Provider-neutral screening report, created once per applicant."""

    credit_score: int = DEFAULT_CREDIT_SCORE
    evictions: int = Field(default=0, ge=0)
    bankruptcies: int = Field(default=0, ge=0)
    criminal_offenses: int = Field(default=0, ge=0)
    fraud_risk_score: float | None = 0.0
    identity_verified: bool = False
    public_safety_match: PublicSafetyMatch | None = Field(
        default_factory=PublicSafetyMatch
    )
    source_request_ids: dict[str, str] = Field(default_factory=dict)
    source: ReportSource = "provider"
    screened_at: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_estimated(self) -> bool:
        return self.source == "synthetic"


class ApplicantInfo(BaseModel):
    """Applicant-supplied identity details."""

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name.strip(), self.last_name.strip()) if part)
