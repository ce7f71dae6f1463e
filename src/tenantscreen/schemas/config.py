"""Pydantic configuration schema for YAML and environment input."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

ENV_BASE_URL = "CRS_API_URL"
ENV_USERNAME = "CRS_API_USERNAME"
ENV_PASSWORD = "CRS_API_PASSWORD"


class ProviderConfig(BaseModel):
    """Screening provider connection settings."""

    base_url: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, repr=False)
    timeout_seconds: float = Field(default=10.0, gt=0)
    refresh_margin_seconds: int = Field(default=300, ge=0)
    default_ttl_seconds: int = Field(default=3600, gt=0)

    model_config = ConfigDict(extra="forbid")

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.username and self.password)

    def with_environment(self, environ: Mapping[str, str] | None = None) -> "ProviderConfig":
        """Fill missing credentials from ``CRS_API_*`` environment variables."""
        env = os.environ if environ is None else environ
        return self.model_copy(
            update={
                "base_url": self.base_url or env.get(ENV_BASE_URL) or None,
                "username": self.username or env.get(ENV_USERNAME) or None,
                "password": self.password or env.get(ENV_PASSWORD) or None,
            }
        )


class WatchlistConfig(BaseModel):
    url: str = "https://api.fbi.gov/wanted/v1/list"
    page_size: int = Field(default=20, gt=0)
    timeout_seconds: float = Field(default=10.0, gt=0)
    enabled: bool = True

    model_config = ConfigDict(extra="forbid")


class ScoringConfig(BaseModel):
    weights: dict[str, int] | None = None
    thresholds: dict[str, int] | None = None

    model_config = ConfigDict(extra="forbid")


class StoreConfig(BaseModel):
    path: str | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    watchlist: WatchlistConfig = Field(default_factory=WatchlistConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "provider": self.provider.model_dump(),
            "watchlist": self.watchlist.model_dump(),
        }
        scoring = self.scoring.model_dump(exclude_none=True)
        if scoring:
            settings["scoring"] = scoring
        if self.store.path:
            settings["store"] = self.store.model_dump(exclude_none=True)
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
