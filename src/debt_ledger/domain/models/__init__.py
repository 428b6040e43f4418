"""Domain models package."""

from .categories import Category, default_categories
from .currency import (
    SUPPORTED_CURRENCIES,
    ConversionResult,
    Converted,
    Currency,
    RateSourceKind,
    RateTable,
    Unconverted,
    get_currency,
    is_supported_currency,
)
from .debts import (
    Classification,
    DebtPayload,
    DebtRecord,
    DebtStatus,
    Direction,
    NewDebt,
)
from .ledger import (
    BalanceDelta,
    CategoryBreakdown,
    LedgerInsights,
    LedgerSnapshot,
    LedgerTotals,
    Period,
    PersonStanding,
    PersonSummary,
    TimeSeries,
    TimeWindow,
)

__all__ = [
    "Category",
    "default_categories",
    "SUPPORTED_CURRENCIES",
    "ConversionResult",
    "Converted",
    "Currency",
    "RateSourceKind",
    "RateTable",
    "Unconverted",
    "get_currency",
    "is_supported_currency",
    "Classification",
    "DebtPayload",
    "NewDebt",
    "DebtRecord",
    "DebtStatus",
    "Direction",
    "BalanceDelta",
    "CategoryBreakdown",
    "LedgerInsights",
    "LedgerSnapshot",
    "LedgerTotals",
    "Period",
    "PersonStanding",
    "PersonSummary",
    "TimeSeries",
    "TimeWindow",
]
