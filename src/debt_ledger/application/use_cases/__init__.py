"""Application use cases package."""

from .category_catalog import CategoryCatalog
from .currency_normalizer import CurrencyNormalizer
from .get_ledger_overview import LedgerAggregator
from .rate_cache import RateCache
from .recompute_coordinator import CoordinatorState, RecomputeCoordinator
from .record_debt import RecordDebtUseCase

__all__ = [
    "CategoryCatalog",
    "CurrencyNormalizer",
    "LedgerAggregator",
    "RateCache",
    "CoordinatorState",
    "RecomputeCoordinator",
    "RecordDebtUseCase",
]
