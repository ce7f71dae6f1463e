"""Bearer credential cache for the screening provider."""

from __future__ import annotations

import threading
from typing import Callable

import pendulum
import structlog

from ..http import ProviderClient
from ..schemas.config import ProviderConfig

Clock = Callable[[], pendulum.DateTime]


def _utc_now() -> pendulum.DateTime:
    return pendulum.now("UTC")


class SessionCredentialCache:
    """Caches one provider token and refreshes it ahead of expiry.

    A ``None`` result means the provider is unavailable (not configured or
    login failed); callers degrade instead of failing.
    """

    def __init__(
        self,
        *,
        client: ProviderClient,
        config: ProviderConfig,
        clock: Clock | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._clock = clock or _utc_now
        self._token: str | None = None
        self._expires_at: pendulum.DateTime | None = None
        self._lock = threading.Lock()
        self._logger = structlog.get_logger(__name__)

    @property
    def configured(self) -> bool:
        return self._config.configured

    @property
    def expires_at(self) -> pendulum.DateTime | None:
        return self._expires_at

    def get_credential(self) -> str | None:
        if not self.configured:
            return None

        # Held across the login exchange so concurrent callers log in once.
        with self._lock:
            if self._is_fresh():
                return self._token
            return self._login()

    def invalidate(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = None

    def _is_fresh(self) -> bool:
        if not self._token or self._expires_at is None:
            return False
        margin = self._expires_at.subtract(seconds=self._config.refresh_margin_seconds)
        return self._clock() < margin

    def _login(self) -> str | None:
        url = f"{self._config.base_url.rstrip('/')}/users/login"
        try:
            response = self._client.post_json(
                url,
                {"username": self._config.username, "password": self._config.password},
                timeout=self._config.timeout_seconds,
            )
        except Exception as exc:  # noqa: BLE001
            self._logger.warning("credentials.login_failed", error=str(exc) or type(exc).__name__)
            return None

        body = response.body if isinstance(response.body, dict) else {}
        token = body.get("token")
        if not token:
            self._logger.warning("credentials.login_failed", error="response carried no token")
            return None

        ttl = body.get("expires") or self._config.default_ttl_seconds
        try:
            ttl_seconds = int(ttl)
        except (TypeError, ValueError):
            ttl_seconds = self._config.default_ttl_seconds

        self._token = str(token)
        self._expires_at = self._clock().add(seconds=ttl_seconds)
        self._logger.info("credentials.login_succeeded", expires_at=self._expires_at.to_iso8601_string())
        return self._token


__all__ = ["SessionCredentialCache"]
