"""Provider check adapters."""

from __future__ import annotations

from .base import CheckOutcome, SandboxCheck
from .sandbox import (
    CreditReportCheck,
    CriminalRecordCheck,
    EvictionRecordCheck,
    FraudScoreCheck,
    IdentityVerificationCheck,
)
from .watchlist import PublicSafetyWatchlistCheck

__all__ = [
    "CheckOutcome",
    "CreditReportCheck",
    "CriminalRecordCheck",
    "EvictionRecordCheck",
    "FraudScoreCheck",
    "IdentityVerificationCheck",
    "PublicSafetyWatchlistCheck",
    "SandboxCheck",
]
