"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

from debt_ledger.application.ports.database import DatabaseEnginePort
from debt_ledger.application.ports.identity import IdentityPort
from debt_ledger.application.use_cases.category_catalog import CategoryCatalog
from debt_ledger.application.use_cases.currency_normalizer import (
    CurrencyNormalizer,
)
from debt_ledger.application.use_cases.get_ledger_overview import (
    LedgerAggregator,
)
from debt_ledger.application.use_cases.rate_cache import RateCache
from debt_ledger.application.use_cases.recompute_coordinator import (
    RecomputeCoordinator,
)
from debt_ledger.application.use_cases.record_debt import RecordDebtUseCase
from debt_ledger.infrastructure.change_feed import InMemoryChangeFeed
from debt_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from debt_ledger.infrastructure.debt_repository import SqlAlchemyDebtRepository
from debt_ledger.infrastructure.identity import StaticIdentity
from debt_ledger.infrastructure.logging.logger import get_app_logger
from debt_ledger.infrastructure.preference_store import (
    SqlAlchemyPreferenceStore,
)
from debt_ledger.infrastructure.rate_source import HttpRateSource
from debt_ledger.infrastructure.settings import LedgerSettings


@dataclass(frozen=True)
class LedgerServices:
    """Wired services of one ledger owner."""

    settings: LedgerSettings
    identity: IdentityPort
    change_feed: InMemoryChangeFeed
    repository: SqlAlchemyDebtRepository
    preferences: SqlAlchemyPreferenceStore
    normalizer: CurrencyNormalizer
    aggregator: LedgerAggregator
    record_debt: RecordDebtUseCase
    categories: CategoryCatalog

    def build_coordinator(self) -> RecomputeCoordinator:
        """Return a coordinator watching the owner's records."""
        return RecomputeCoordinator(
            repository=self.repository,
            change_feed=self.change_feed,
            aggregator=self.aggregator,
            identity=self.identity,
            period=self.settings.period,
            logger=get_app_logger(),
        )


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_identity(settings: LedgerSettings) -> IdentityPort:
    """Return the identity of the configured local owner."""
    return StaticIdentity(settings.owner_id, settings.user_name)


def build_rate_source(settings: LedgerSettings) -> HttpRateSource:
    """Return the HTTP rate source configured from settings."""
    return HttpRateSource(
        url_template=settings.rates_api_url,
        timeout_seconds=settings.rates_timeout_seconds,
        max_attempts=settings.rates_max_attempts,
        logger=get_app_logger(),
    )


def build_currency_normalizer(
    settings: LedgerSettings,
    preferences: SqlAlchemyPreferenceStore,
) -> CurrencyNormalizer:
    """Return a normalizer backed by a rate cache over the HTTP source."""
    rate_cache = RateCache(
        rate_source=build_rate_source(settings),
        preference_store=preferences,
        ttl_seconds=settings.rates_ttl_seconds,
        logger=get_app_logger(),
    )
    return CurrencyNormalizer(rate_cache, preferences, logger=get_app_logger())


def build_ledger_services(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerServices:
    """Wire every ledger service for the configured owner.

    Args:
        db_port: Optional database port; defaults to the environment engine.
        settings: Optional settings; defaults to ``LedgerSettings.from_env``.

    Returns:
        LedgerServices: Services sharing one change feed and one rate cache.
    """
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or LedgerSettings.from_env()
    logger = get_app_logger()

    identity = build_identity(resolved_settings)
    change_feed = InMemoryChangeFeed(logger=logger)
    repository = SqlAlchemyDebtRepository(
        resolved_db,
        change_feed=change_feed,
        logger=logger,
    )
    preferences = SqlAlchemyPreferenceStore(resolved_db)
    normalizer = build_currency_normalizer(resolved_settings, preferences)
    aggregator = LedgerAggregator(normalizer, identity, logger=logger)
    record_debt = RecordDebtUseCase(repository, identity, logger=logger)
    categories = CategoryCatalog(preferences, logger=logger)
    return LedgerServices(
        settings=resolved_settings,
        identity=identity,
        change_feed=change_feed,
        repository=repository,
        preferences=preferences,
        normalizer=normalizer,
        aggregator=aggregator,
        record_debt=record_debt,
        categories=categories,
    )


__all__ = [
    "LedgerServices",
    "build_database_adapter",
    "build_identity",
    "build_rate_source",
    "build_currency_normalizer",
    "build_ledger_services",
]
