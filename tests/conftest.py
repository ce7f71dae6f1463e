from __future__ import annotations

from typing import Any, Callable, Mapping

import pendulum
import pytest

from tenantscreen.http import ProviderRequestError, ProviderResponse
from tenantscreen.schemas import PublicSafetyMatch, ScreeningReport



class FakeProviderClient:
    """In-memory stand-in for HTTPProviderClient.

    ``routes`` maps a URL suffix to a response body, a ProviderResponse, an
    exception instance to raise, or a callable returning one of those.
    """

    def __init__(self, routes: Mapping[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[dict[str, Any]] = []

    def post_json(self, url, payload, *, token=None, timeout=None):
        self.calls.append({"method": "POST", "url": url, "payload": payload, "token": token})
        return self._respond(url)

    def get_json(self, url, params=None, *, timeout=None):
        self.calls.append({"method": "GET", "url": url, "params": dict(params or {})})
        return self._respond(url)

    def calls_to(self, suffix: str) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["url"].endswith(suffix)]

    def _respond(self, url: str) -> ProviderResponse:
        for suffix, result in self.routes.items():
            if url.endswith(suffix):
                if callable(result) and not isinstance(result, ProviderResponse):
                    result = result()
                if isinstance(result, Exception):
                    raise result
                if isinstance(result, ProviderResponse):
                    return result
                return ProviderResponse(body=result, headers={})
        raise ProviderRequestError("no route", url=url, status=404)


class FrozenClock:
    def __init__(self, start: pendulum.DateTime | None = None) -> None:
        self.now = start or pendulum.datetime(2025, 1, 1, 12, 0, 0, tz="UTC")

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs: int) -> None:
        self.now = self.now.add(**kwargs)


@pytest.fixture
def fake_client() -> FakeProviderClient:
    return FakeProviderClient()


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def clean_report() -> Callable[..., ScreeningReport]:
    def build(**overrides: Any) -> ScreeningReport:
        values: dict[str, Any] = {
            "credit_score": 750,
            "evictions": 0,
            "bankruptcies": 0,
            "criminal_offenses": 0,
            "fraud_risk_score": 1,
            "identity_verified": True,
            "public_safety_match": PublicSafetyMatch(
                match_found=False,
                match_count=0,
                searched_name="Jane Doe",
                checked=True,
            ),
        }
        values.update(overrides)
        return ScreeningReport(**values)

    return build
