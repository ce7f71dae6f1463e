"""Checks served by the screening provider's sandbox.

Each check posts a canned subject profile and pulls the few fields it needs
out of the provider's response with the structural extractors.
"""

from __future__ import annotations

from typing import Any

from ..core.extract import count_occurrences, find_first_value
from ..http import ProviderClient
from ..schemas.report import DEFAULT_CREDIT_SCORE
from .base import CheckOutcome


class _ProviderSandboxCheck:
    name: str = ""
    path: str = ""

    def __init__(self, *, client: ProviderClient, base_url: str | None, timeout: float = 10.0) -> None:
        self._client = client
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = timeout

    @property
    def url(self) -> str:
        return f"{self._base_url}{self.path}"

    def run(self, credential: str, identity: dict[str, Any]) -> CheckOutcome:
        response = self._client.post_json(
            self.url,
            identity,
            token=credential,
            timeout=self._timeout,
        )
        return CheckOutcome(
            check=self.name,
            fields=self.extract(response.body),
            request_id=response.header("requestid"),
        )

    def extract(self, body: Any) -> dict[str, Any]:
        raise NotImplementedError


class FraudScoreCheck(_ProviderSandboxCheck):
    """Email, phone, IP and address risk scoring."""

    name = "fraud"
    path = "/fraud-finder/fraud-finder"

    def extract(self, body: Any) -> dict[str, Any]:
        score = find_first_value(body, "riskScore", "score", "fraudScore", "overallScore")
        return {"fraud_risk_score": float(score or 0)}


class IdentityVerificationCheck(_ProviderSandboxCheck):
    """Identity verification.

    The subject counts as verified unless the verification index is weak
    (below 10), the risk score is high (above 500) or the body carries
    provider messages or an error.
    """

    name = "identity"
    path = "/flex-id/flex-id"

    MIN_VERIFICATION_INDEX = 10
    MAX_RISK_SCORE = 500

    def extract(self, body: Any) -> dict[str, Any]:
        cvi = find_first_value(
            body, "ComprehensiveVerificationIndex", "cvi", "CVI", "verificationScore", "score"
        )
        risk = find_first_value(body, "riskScore", "fraudScore")
        flagged = isinstance(body, dict) and bool(body.get("messages") or body.get("error"))
        verified = not (
            flagged
            or (cvi is not None and cvi < self.MIN_VERIFICATION_INDEX)
            or (risk is not None and risk > self.MAX_RISK_SCORE)
        )
        return {"identity_verified": verified}


class CreditReportCheck(_ProviderSandboxCheck):
    name = "credit"
    path = "/transunion/credit-report/standard/tu-prequal-vantage4"

    MIN_SCORE = 300
    MAX_SCORE = 850

    def extract(self, body: Any) -> dict[str, Any]:
        score = find_first_value(body, "scoreValue", "vantageScore", "creditScore", "score", "riskScore")
        if score is None:
            credit_score = DEFAULT_CREDIT_SCORE
        else:
            credit_score = int(min(self.MAX_SCORE, max(self.MIN_SCORE, score)))

        # An explicit summary count wins over counting records.
        bankruptcies = find_first_value(body, "bankruptciesCount", "bankruptcies")
        if bankruptcies is None:
            bankruptcies = count_occurrences(body, "bankruptcy", "bankruptcies")
        return {"credit_score": credit_score, "bankruptcies": max(0, int(bankruptcies))}


class CriminalRecordCheck(_ProviderSandboxCheck):
    name = "criminal"
    path = "/criminal/new-request"

    def extract(self, body: Any) -> dict[str, Any]:
        offenses = count_occurrences(body, "offense", "offenses", "conviction") or find_first_value(
            body, "offenseCount", "convictions"
        )
        return {"criminal_offenses": max(0, int(offenses or 0))}


class EvictionRecordCheck(_ProviderSandboxCheck):
    name = "eviction"
    path = "/eviction/new-request"

    def extract(self, body: Any) -> dict[str, Any]:
        evictions = count_occurrences(body, "eviction", "evictions", "count") or find_first_value(
            body, "evictionCount", "total"
        )
        return {"evictions": max(0, int(evictions or 0))}


__all__ = [
    "CreditReportCheck",
    "CriminalRecordCheck",
    "EvictionRecordCheck",
    "FraudScoreCheck",
    "IdentityVerificationCheck",
]
