"""Derived ledger views computed from debt records."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from debt_ledger.utils.decimal_utils import round_half_up

from .debts import DebtRecord


class Period(str, Enum):
    """Analytics periods offered by the ledger."""

    HOUR = "1H"
    DAY = "1D"
    WEEK = "1W"
    MONTH = "1M"
    YEAR = "1Y"
    ALL = "ALL"


class PersonStanding(str, Enum):
    """Sign of a counterparty's net balance."""

    OWED = "owed"
    OWE = "owe"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class TimeWindow:
    """Closed time range ``[start, end]``."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class LedgerTotals:
    """Totals of active debts for the current user.

    Attributes:
        total_owing: What the user owes (outgoing, not paid).
        total_owed: What others owe the user (incoming, not paid).
        currency_code: Display currency of both totals.
        unconverted_currencies: Currencies summed without a usable rate.
    """

    total_owing: Decimal
    total_owed: Decimal
    currency_code: str
    unconverted_currencies: tuple[str, ...] = ()

    @property
    def net_balance(self) -> Decimal:
        """Return total_owed minus total_owing."""
        return self.total_owed - self.total_owing


@dataclass(frozen=True)
class PersonSummary:
    """Balances between the user and one counterparty."""

    person_name: str
    counterparty_key: str
    total_owed: Decimal
    total_owing: Decimal
    active_debts: int
    paid_debts: int
    currency_code: str
    last_activity: datetime | None = None

    @property
    def net_balance(self) -> Decimal:
        return self.total_owed - self.total_owing

    @property
    def total_debts(self) -> int:
        return self.active_debts + self.paid_debts

    @property
    def standing(self) -> PersonStanding:
        if self.net_balance > 0:
            return PersonStanding.OWED
        if self.net_balance < 0:
            return PersonStanding.OWE
        return PersonStanding.NEUTRAL


@dataclass(frozen=True)
class CategoryBreakdown:
    """Amount aggregated for one category within a window."""

    category: str
    amount: Decimal
    percentage: int
    rank: int


@dataclass(frozen=True)
class TimeSeries:
    """Four equal buckets of created amounts across a period window."""

    period: Period
    window: TimeWindow
    labels: tuple[str, ...]
    buckets: tuple[Decimal, ...]

    @property
    def total(self) -> Decimal:
        return sum(self.buckets, Decimal("0"))


@dataclass(frozen=True)
class BalanceDelta:
    """Change of net balance versus the preceding window of equal length."""

    percentage: Decimal
    is_positive: bool
    current_net: Decimal = Decimal("0")
    previous_net: Decimal = Decimal("0")


@dataclass(frozen=True)
class LedgerInsights:
    """Trust and activity metrics across the whole record set."""

    total_debts: int
    paid_debts: int
    active_debts: int
    overdue_debts: int
    upcoming_debts: int

    @property
    def on_time_rate(self) -> int:
        """Paid share of all debts as a whole percentage."""
        if self.total_debts == 0:
            return 0
        return int(
            round_half_up(Decimal(self.paid_debts) * 100 / self.total_debts)
        )


@dataclass(frozen=True)
class LedgerSnapshot:
    """Everything published after one aggregation pass."""

    owner_id: str
    user_name: str | None
    currency_code: str
    period: Period
    computed_at: datetime
    records: tuple[DebtRecord, ...]
    totals: LedgerTotals
    persons: tuple[PersonSummary, ...]
    categories: tuple[CategoryBreakdown, ...]
    time_series: TimeSeries
    balance_delta: BalanceDelta
    insights: LedgerInsights
    warnings: tuple[str, ...] = field(default=())


__all__ = [
    "Period",
    "PersonStanding",
    "TimeWindow",
    "LedgerTotals",
    "PersonSummary",
    "CategoryBreakdown",
    "TimeSeries",
    "BalanceDelta",
    "LedgerInsights",
    "LedgerSnapshot",
]
