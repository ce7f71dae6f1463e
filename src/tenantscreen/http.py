"""Minimal JSON-over-HTTP client for screening providers."""

from __future__ import annotations

import http.client
import json
import socket
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol
from urllib import error, parse, request


class ProviderRequestError(RuntimeError):
    """Raised when a provider call fails or returns an unusable body."""

    def __init__(self, message: str, *, url: str, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status

    def __str__(self) -> str:
        prefix = f"HTTP {self.status} " if self.status is not None else ""
        return f"{prefix}{self.args[0]} ({self.url})"


@dataclass(slots=True)
class ProviderResponse:
    body: Any
    headers: dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class ProviderClient(Protocol):
    def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        token: str | None = None,
        timeout: float | None = None,
    ) -> ProviderResponse:
        """POST a JSON document and decode the JSON response."""

    def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> ProviderResponse:
        """GET a URL with query parameters and decode the JSON response."""


class HTTPProviderClient:
    """urllib-based client; every call carries its own timeout."""

    def __init__(self, *, timeout: float = 10.0, user_agent: str = "tenantscreen") -> None:
        self._timeout = timeout
        self._user_agent = user_agent

    def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        token: str | None = None,
        timeout: float | None = None,
    ) -> ProviderResponse:
        data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = self._headers(token)
        headers["Content-Type"] = "application/json"
        req = request.Request(url, data=data, headers=headers, method="POST")
        return self._send(req, url, timeout)

    def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> ProviderResponse:
        full_url = f"{url}?{parse.urlencode(params)}" if params else url
        req = request.Request(full_url, headers=self._headers(None), method="GET")
        return self._send(req, full_url, timeout)

    def _headers(self, token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self._user_agent}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, req: request.Request, url: str, timeout: float | None) -> ProviderResponse:
        try:
            with request.urlopen(req, timeout=timeout or self._timeout) as resp:
                payload = resp.read()
                headers = {name.lower(): value for name, value in resp.headers.items()}
        except error.HTTPError as exc:
            raise ProviderRequestError(exc.reason or "request rejected", url=url, status=exc.code) from exc
        except error.URLError as exc:
            raise ProviderRequestError(str(exc.reason), url=url) from exc
        except (socket.timeout, TimeoutError) as exc:
            raise ProviderRequestError("request timed out", url=url) from exc
        except (OSError, http.client.HTTPException) as exc:
            raise ProviderRequestError(f"connection failed: {exc!r}", url=url) from exc

        try:
            raw = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProviderRequestError(f"undecodable response body: {exc}", url=url) from exc

        if not raw:
            return ProviderResponse(body={}, headers=headers)
        try:
            body = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProviderRequestError(f"unparseable response body: {exc}", url=url) from exc
        return ProviderResponse(body=body, headers=headers)


__all__ = [
    "HTTPProviderClient",
    "ProviderClient",
    "ProviderRequestError",
    "ProviderResponse",
]
