"""Dependency injection container for the screening engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from dependency_injector import containers, providers

from .adapters import (
    CreditReportCheck,
    CriminalRecordCheck,
    EvictionRecordCheck,
    FraudScoreCheck,
    IdentityVerificationCheck,
    PublicSafetyWatchlistCheck,
)
from .core import (
    IdentityRotation,
    MatchScoreCalculator,
    ScreeningContext,
    ScreeningOrchestrator,
    SessionCredentialCache,
    SyntheticReportGenerator,
)
from .http import HTTPProviderClient, ProviderClient
from .pipeline import ScreeningPipeline, ScreeningService
from .schemas.config import ProviderConfig, WatchlistConfig, load_config
from .store import InMemoryReportStore, JsonFileReportStore, ReportStore


def build_provider_config(
    raw: dict[str, Any] | None,
    environ: Mapping[str, str] | None = None,
) -> ProviderConfig:
    return ProviderConfig.model_validate(raw or {}).with_environment(environ)


def build_watchlist_check(
    raw: dict[str, Any] | None,
    client: ProviderClient,
) -> PublicSafetyWatchlistCheck | None:
    config = WatchlistConfig.model_validate(raw or {})
    if not config.enabled:
        return None
    return PublicSafetyWatchlistCheck(
        client=client,
        url=config.url,
        page_size=config.page_size,
        timeout=config.timeout_seconds,
    )


def build_report_store(raw: dict[str, Any] | None) -> ReportStore:
    path = (raw or {}).get("path")
    if path:
        return JsonFileReportStore(Path(path))
    return InMemoryReportStore()


class ScreeningContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()
    environ = providers.Object(None)

    provider_config = providers.Singleton(
        build_provider_config,
        raw=config.__getattr__("provider"),  # `.provider` is a Provider attribute
        environ=environ,
    )

    http_client = providers.Singleton(HTTPProviderClient)

    credentials = providers.Singleton(
        SessionCredentialCache,
        client=http_client,
        config=provider_config,
    )
    identities = providers.Singleton(IdentityRotation)
    context = providers.Singleton(
        ScreeningContext,
        credentials=credentials,
        identities=identities,
    )

    fraud_check = providers.Singleton(
        FraudScoreCheck,
        client=http_client,
        base_url=provider_config.provided.base_url,
        timeout=provider_config.provided.timeout_seconds,
    )
    identity_check = providers.Singleton(
        IdentityVerificationCheck,
        client=http_client,
        base_url=provider_config.provided.base_url,
        timeout=provider_config.provided.timeout_seconds,
    )
    credit_check = providers.Singleton(
        CreditReportCheck,
        client=http_client,
        base_url=provider_config.provided.base_url,
        timeout=provider_config.provided.timeout_seconds,
    )
    criminal_check = providers.Singleton(
        CriminalRecordCheck,
        client=http_client,
        base_url=provider_config.provided.base_url,
        timeout=provider_config.provided.timeout_seconds,
    )
    eviction_check = providers.Singleton(
        EvictionRecordCheck,
        client=http_client,
        base_url=provider_config.provided.base_url,
        timeout=provider_config.provided.timeout_seconds,
    )

    sandbox_checks = providers.List(
        fraud_check,
        identity_check,
        credit_check,
        criminal_check,
        eviction_check,
    )

    watchlist_check = providers.Singleton(
        build_watchlist_check,
        raw=config.watchlist,
        client=http_client,
    )

    synthetic = providers.Singleton(SyntheticReportGenerator)

    orchestrator = providers.Singleton(
        ScreeningOrchestrator,
        context=context,
        checks=sandbox_checks,
        watchlist=watchlist_check,
        synthetic=synthetic,
    )

    report_store = providers.Singleton(build_report_store, raw=config.store)

    calculator = providers.Singleton(
        MatchScoreCalculator,
        weights=config.scoring.weights,
        thresholds=config.scoring.thresholds,
    )

    service = providers.Singleton(
        ScreeningService,
        orchestrator=orchestrator,
        store=report_store,
        calculator=calculator,
    )

    pipeline = providers.Factory(ScreeningPipeline, service=service)


def create_container(
    *,
    settings: dict | None = None,
    environ: Mapping[str, str] | None = None,
) -> ScreeningContainer:
    """Instantiate container with validated settings.

    ``environ`` replaces ``os.environ`` as the source of ``CRS_API_*``
    credential fallbacks.
    """

    container = ScreeningContainer()
    app_config = load_config(settings)
    container.config.from_dict(app_config.to_settings())

    if environ is not None:
        container.environ.override(providers.Object(dict(environ)))

    return container
