from __future__ import annotations

import pytest

from tenantscreen.adapters import (
    CreditReportCheck,
    CriminalRecordCheck,
    EvictionRecordCheck,
    FraudScoreCheck,
    IdentityVerificationCheck,
    SandboxCheck,
)
from tenantscreen.http import ProviderRequestError, ProviderResponse

BASE_URL = "https://sandbox.example.test/api"


def build(check_cls, client):
    return check_cls(client=client, base_url=BASE_URL + "/", timeout=2.0)


def test_checks_satisfy_protocol(fake_client):
    for check_cls in (
        FraudScoreCheck,
        IdentityVerificationCheck,
        CreditReportCheck,
        CriminalRecordCheck,
        EvictionRecordCheck,
    ):
        assert isinstance(build(check_cls, fake_client), SandboxCheck)


def test_fraud_check_posts_identity_with_bearer_token(fake_client):
    fake_client.routes["/fraud-finder/fraud-finder"] = ProviderResponse(
        body={"data": {"results": [{"riskScore": "2"}]}},
        headers={"requestid": "fraud-123"},
    )
    check = build(FraudScoreCheck, fake_client)

    outcome = check.run("tok-1", {"email": "example@atdata.com"})

    call = fake_client.calls[0]
    assert call["url"] == f"{BASE_URL}/fraud-finder/fraud-finder"
    assert call["token"] == "tok-1"
    assert call["payload"] == {"email": "example@atdata.com"}
    assert outcome.ok
    assert outcome.fields == {"fraud_risk_score": 2.0}
    assert outcome.request_id == "fraud-123"


def test_fraud_check_without_score_reports_zero(fake_client):
    fake_client.routes["/fraud-finder/fraud-finder"] = {"status": "ok"}

    outcome = build(FraudScoreCheck, fake_client).run("tok", {})

    assert outcome.fields == {"fraud_risk_score": 0.0}


def test_identity_check_marks_verified_on_success(fake_client):
    fake_client.routes["/flex-id/flex-id"] = {"anything": True}

    outcome = build(IdentityVerificationCheck, fake_client).run("tok", {})

    assert outcome.fields == {"identity_verified": True}
    assert outcome.request_id is None


def test_credit_check_extracts_score_and_bankruptcies(fake_client):
    fake_client.routes["/tu-prequal-vantage4"] = {
        "creditReport": {
            "scoreModels": [{"vantageScore": "712"}],
            "publicRecords": {"bankruptcies": [{"court": "TX"}]},
        }
    }

    outcome = build(CreditReportCheck, fake_client).run("tok", {})

    assert outcome.fields == {"credit_score": 712, "bankruptcies": 1}


def test_credit_check_defaults_score_when_missing(fake_client):
    fake_client.routes["/tu-prequal-vantage4"] = {"creditReport": {}}

    outcome = build(CreditReportCheck, fake_client).run("tok", {})

    assert outcome.fields == {"credit_score": 680, "bankruptcies": 0}


def test_criminal_check_counts_offenses(fake_client):
    fake_client.routes["/criminal/new-request"] = {
        "records": [{"offenses": ["theft", "assault"]}, {"conviction": "dui"}]
    }

    outcome = build(CriminalRecordCheck, fake_client).run("tok", {})

    assert outcome.fields == {"criminal_offenses": 3}


def test_criminal_check_falls_back_to_explicit_count(fake_client):
    fake_client.routes["/criminal/new-request"] = {"summary": {"offenseCount": "2"}}

    outcome = build(CriminalRecordCheck, fake_client).run("tok", {})

    assert outcome.fields == {"criminal_offenses": 2}


def test_eviction_check_counts_and_falls_back(fake_client):
    fake_client.routes["/eviction/new-request"] = {"evictions": [{"case": 1}, {"case": 2}]}
    counted = build(EvictionRecordCheck, fake_client).run("tok", {})

    fake_client.routes["/eviction/new-request"] = {"summary": {"evictionCount": 1}}
    fallback = build(EvictionRecordCheck, fake_client).run("tok", {})

    fake_client.routes["/eviction/new-request"] = {"status": "clear"}
    clear = build(EvictionRecordCheck, fake_client).run("tok", {})

    assert counted.fields == {"evictions": 2}
    assert fallback.fields == {"evictions": 1}
    assert clear.fields == {"evictions": 0}


def test_transport_errors_propagate_to_caller(fake_client):
    fake_client.routes["/eviction/new-request"] = ProviderRequestError("timed out", url=BASE_URL)

    with pytest.raises(ProviderRequestError):
        build(EvictionRecordCheck, fake_client).run("tok", {})


@pytest.mark.parametrize(
    "body",
    [
        {"messages": ["Subject not found"], "ComprehensiveVerificationIndex": 0},
        {"error": "invalid request"},
        {"result": {"ComprehensiveVerificationIndex": "5"}},
        {"result": {"cvi": 40, "riskScore": 720}},
    ],
)
def test_identity_check_flags_weak_or_failed_verification(fake_client, body):
    fake_client.routes["/flex-id/flex-id"] = body

    outcome = build(IdentityVerificationCheck, fake_client).run("tok", {})

    assert outcome.fields == {"identity_verified": False}


def test_identity_check_accepts_strong_verification(fake_client):
    fake_client.routes["/flex-id/flex-id"] = {
        "result": {"ComprehensiveVerificationIndex": 10, "riskScore": 500},
        "messages": [],
    }

    outcome = build(IdentityVerificationCheck, fake_client).run("tok", {})

    assert outcome.fields == {"identity_verified": True}


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"score": 9}, 300),
        ({"scoreValue": "912"}, 850),
        ({"scoreModels": [{"scoreValue": 688}], "vantageScore": 701}, 701),
    ],
)
def test_credit_score_is_clamped_to_bureau_range(fake_client, body, expected):
    fake_client.routes["/tu-prequal-vantage4"] = body

    outcome = build(CreditReportCheck, fake_client).run("tok", {})

    assert outcome.fields["credit_score"] == expected


def test_credit_check_prefers_explicit_bankruptcy_count(fake_client):
    fake_client.routes["/tu-prequal-vantage4"] = {
        "vantageScore": 640,
        "derogatorySummary": {"bankruptciesCount": 2},
        "publicRecords": {"bankruptcies": [{"court": "TX"}]},
    }

    outcome = build(CreditReportCheck, fake_client).run("tok", {})

    assert outcome.fields == {"credit_score": 640, "bankruptcies": 2}
