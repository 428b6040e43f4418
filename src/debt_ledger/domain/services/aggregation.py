"""Domain services aggregating debt records into ledger views.

Every function here is pure: the record set, the current user's name, the
clock reading and the rate table are all passed in, so identical inputs give
identical outputs. Amounts are converted into the display currency before
they are summed.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal
from logging import Logger

from debt_ledger.domain.constants import UPCOMING_WINDOW_DAYS
from debt_ledger.domain.models import (
    BalanceDelta,
    CategoryBreakdown,
    DebtRecord,
    LedgerInsights,
    LedgerTotals,
    Period,
    PersonSummary,
    RateTable,
    TimeSeries,
    TimeWindow,
)
from debt_ledger.domain.services.classification import classify
from debt_ledger.domain.services.fx import convert_amount
from debt_ledger.domain.services.normalization import (
    clean_display_name,
    counterparty_key,
    normalize_category,
)
from debt_ledger.domain.services.periods import (
    bucket_label,
    period_window,
    previous_window,
    split_window,
)
from debt_ledger.utils.decimal_utils import ZERO, round_half_up


class DisplayAmounts:
    """Convert record amounts into one display currency.

    Currencies without a usable rate are summed unconverted; each one is
    reported once through the logger and listed in ``unconverted``.
    """

    def __init__(
        self,
        target_currency: str,
        rates: RateTable | None,
        logger: Logger,
    ) -> None:
        self.target_currency = target_currency
        self._rates = rates
        self._logger = logger
        self._unconverted: list[str] = []

    @property
    def unconverted(self) -> tuple[str, ...]:
        return tuple(self._unconverted)

    def of(self, record: DebtRecord) -> Decimal:
        result = convert_amount(
            record.amount,
            record.currency,
            self.target_currency,
            self._rates,
        )
        if not result.converted and record.currency not in self._unconverted:
            self._unconverted.append(record.currency)
            self._logger.warning(
                f"Summing {record.currency} amounts unconverted into "
                f"{self.target_currency}: {result.reason}"
            )
        return result.amount


def compute_totals(
    records: Iterable[DebtRecord],
    current_user_name: str | None,
    *,
    target_currency: str,
    rates: RateTable | None,
    logger: Logger,
    window: TimeWindow | None = None,
) -> LedgerTotals:
    """Compute what the user owes and is owed across active debts.

    Args:
        records: Debt records visible to the user.
        current_user_name: Display name anchoring the classification.
        target_currency: Display currency of the totals.
        rates: Rate table used for conversion.
        logger: Logger used for warnings.
        window: Optional creation-time window restricting the records.

    Returns:
        LedgerTotals: Outgoing and incoming totals of non-paid records.
    """
    if not current_user_name:
        logger.warning("No current user name; reporting zero totals")
        return LedgerTotals(ZERO, ZERO, target_currency)

    amounts = DisplayAmounts(target_currency, rates, logger)

    total_owing = ZERO
    total_owed = ZERO
    for record in _within(records, window):
        if record.is_paid:
            continue
        classification = classify(record, current_user_name, logger)
        if classification.is_outgoing:
            total_owing += amounts.of(record)
        else:
            total_owed += amounts.of(record)

    return LedgerTotals(
        total_owing=total_owing,
        total_owed=total_owed,
        currency_code=target_currency,
        unconverted_currencies=amounts.unconverted,
    )


def compute_person_summary(
    records: Iterable[DebtRecord],
    counterparty_name: str,
    current_user_name: str | None,
    *,
    target_currency: str,
    rates: RateTable | None,
    logger: Logger,
) -> PersonSummary:
    """Summarize the debts between the user and one counterparty.

    Names match case-insensitively after whitespace normalization. A
    counterparty without records yields a zeroed summary.
    """
    key = counterparty_key(counterparty_name)
    summary = _PersonAccumulator(clean_display_name(counterparty_name), key)
    if not current_user_name:
        logger.warning("No current user name; reporting an empty summary")
        return summary.build(target_currency)

    amounts = DisplayAmounts(target_currency, rates, logger)
    for record in records:
        classification = classify(record, current_user_name, logger)
        if classification.counterparty_key != key:
            continue
        summary.add(record, classification.is_outgoing, amounts)
    return summary.build(target_currency)


def compute_person_summaries(
    records: Iterable[DebtRecord],
    current_user_name: str | None,
    *,
    target_currency: str,
    rates: RateTable | None,
    logger: Logger,
) -> list[PersonSummary]:
    """Summarize every counterparty, in order of first appearance.

    Records naming the user on both sides are left out.
    """
    if not current_user_name:
        logger.warning("No current user name; reporting no counterparties")
        return []

    amounts = DisplayAmounts(target_currency, rates, logger)
    people: dict[str, _PersonAccumulator] = {}
    for record in records:
        classification = classify(record, current_user_name, logger)
        if classification.is_self_referential:
            continue
        person = people.get(classification.counterparty_key)
        if person is None:
            person = _PersonAccumulator(
                classification.counterparty_name,
                classification.counterparty_key,
            )
            people[classification.counterparty_key] = person
        person.add(record, classification.is_outgoing, amounts)
    return [person.build(target_currency) for person in people.values()]


def compute_category_breakdown(
    records: Iterable[DebtRecord],
    window: TimeWindow | None,
    *,
    target_currency: str,
    rates: RateTable | None,
    logger: Logger,
) -> list[CategoryBreakdown]:
    """Rank categories by amount created within ``window``.

    Records of every status count. Missing categories fall under ``Other``.

    Returns:
        list[CategoryBreakdown]: Categories sorted by amount descending (then
        name), or an empty list when the window total is zero.
    """
    amounts = DisplayAmounts(target_currency, rates, logger)
    totals: dict[str, Decimal] = {}
    for record in _within(records, window):
        category = normalize_category(record.category)
        totals[category] = totals.get(category, ZERO) + amounts.of(record)

    window_total = sum(totals.values(), ZERO)
    if window_total == 0:
        return []

    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [
        CategoryBreakdown(
            category=category,
            amount=amount,
            percentage=int(round_half_up(amount * 100 / window_total)),
            rank=index,
        )
        for index, (category, amount) in enumerate(ordered, start=1)
    ]


def compute_time_series(
    records: Iterable[DebtRecord],
    period: Period,
    now: datetime,
    *,
    target_currency: str,
    rates: RateTable | None,
    logger: Logger,
) -> TimeSeries:
    """Bucket created amounts of the period window into four intervals.

    Intervals are half-open except the last one, which also holds records
    created exactly at ``now``.
    """
    window = period_window(period, now)
    parts = split_window(window)
    buckets = [ZERO for _ in parts]
    amounts = DisplayAmounts(target_currency, rates, logger)
    for record in _within(records, window):
        index = _bucket_index(parts, record.created_at)
        buckets[index] += amounts.of(record)
    return TimeSeries(
        period=period,
        window=window,
        labels=tuple(bucket_label(period, part.start) for part in parts),
        buckets=tuple(buckets),
    )


def compute_balance_delta(
    records: Iterable[DebtRecord],
    period: Period,
    now: datetime,
    current_user_name: str | None,
    *,
    target_currency: str,
    rates: RateTable | None,
    logger: Logger,
) -> BalanceDelta:
    """Compare the period's net balance with the preceding period.

    When the preceding net balance is zero, including when no history reaches
    that far back, the change is reported as 0% and positive.
    """
    records = list(records)
    window = period_window(period, now)
    before = previous_window(period, window)
    amounts = DisplayAmounts(target_currency, rates, logger)

    current_net = ZERO
    previous_net = ZERO
    if current_user_name:
        for record in records:
            if record.is_paid:
                continue
            created = record.created_at
            if window.contains(created):
                current_net += _signed(record, current_user_name, amounts, logger)
            elif before.start <= created < before.end:
                previous_net += _signed(record, current_user_name, amounts, logger)

    if previous_net == 0:
        return BalanceDelta(
            percentage=ZERO,
            is_positive=True,
            current_net=current_net,
            previous_net=previous_net,
        )
    change = (current_net - previous_net) / abs(previous_net) * 100
    return BalanceDelta(
        percentage=round_half_up(abs(change), 1),
        is_positive=change >= 0,
        current_net=current_net,
        previous_net=previous_net,
    )


def compute_insights(
    records: Iterable[DebtRecord],
    now: datetime,
) -> LedgerInsights:
    """Count paid, active, overdue and upcoming debts.

    Upcoming debts are unpaid and due between today and seven days from now.
    """
    today = now.date()
    horizon = (now + timedelta(days=UPCOMING_WINDOW_DAYS)).date()
    total = paid = overdue = upcoming = 0
    for record in records:
        total += 1
        if record.is_paid:
            paid += 1
            continue
        if record.is_overdue(now):
            overdue += 1
        elif today <= record.due_date <= horizon:
            upcoming += 1
    return LedgerInsights(
        total_debts=total,
        paid_debts=paid,
        active_debts=total - paid,
        overdue_debts=overdue,
        upcoming_debts=upcoming,
    )


def find_self_referential(
    records: Iterable[DebtRecord],
    current_user_name: str | None,
) -> list[DebtRecord]:
    """Return records naming the current user as both debtor and creditor."""
    if not current_user_name:
        return []
    return [
        record
        for record in records
        if classify(record, current_user_name).is_self_referential
    ]


class _PersonAccumulator:
    def __init__(self, name: str, key: str) -> None:
        self.name = name
        self.key = key
        self.total_owed = ZERO
        self.total_owing = ZERO
        self.active = 0
        self.paid = 0
        self.last_activity: datetime | None = None

    def add(
        self,
        record: DebtRecord,
        is_outgoing: bool,
        amounts: DisplayAmounts,
    ) -> None:
        if self.last_activity is None or record.created_at > self.last_activity:
            self.last_activity = record.created_at
        if record.is_paid:
            self.paid += 1
            return
        self.active += 1
        if is_outgoing:
            self.total_owing += amounts.of(record)
        else:
            self.total_owed += amounts.of(record)

    def build(self, currency_code: str) -> PersonSummary:
        return PersonSummary(
            person_name=self.name,
            counterparty_key=self.key,
            total_owed=self.total_owed,
            total_owing=self.total_owing,
            active_debts=self.active,
            paid_debts=self.paid,
            currency_code=currency_code,
            last_activity=self.last_activity,
        )


def _within(
    records: Iterable[DebtRecord],
    window: TimeWindow | None,
) -> Iterable[DebtRecord]:
    if window is None:
        return records
    return (record for record in records if window.contains(record.created_at))


def _bucket_index(parts: list[TimeWindow], moment: datetime) -> int:
    for index, part in enumerate(parts):
        if part.start <= moment < part.end:
            return index
    return len(parts) - 1


def _signed(
    record: DebtRecord,
    current_user_name: str,
    amounts: DisplayAmounts,
    logger: Logger,
) -> Decimal:
    amount = amounts.of(record)
    if classify(record, current_user_name, logger).is_outgoing:
        return -amount
    return amount


__all__ = [
    "DisplayAmounts",
    "compute_totals",
    "compute_person_summary",
    "compute_person_summaries",
    "compute_category_breakdown",
    "compute_time_series",
    "compute_balance_delta",
    "compute_insights",
    "find_self_referential",
]
