"""Filtering and ordering rules for debt lists and counterparty lists."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum

from debt_ledger.domain.models import (
    DebtRecord,
    Direction,
    PersonStanding,
    PersonSummary,
)
from debt_ledger.domain.services.classification import classify
from debt_ledger.domain.services.normalization import normalize_person_name


class DueRange(str, Enum):
    ANY = "any"
    OVERDUE = "overdue"
    NEXT_7_DAYS = "next7days"
    NEXT_30_DAYS = "next30days"


class PersonSort(str, Enum):
    STATUS = "status"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    AMOUNT_ASC = "amount_asc"
    AMOUNT_DESC = "amount_desc"


@dataclass(frozen=True)
class RecordFilter:
    """Criteria for the debt list.

    Attributes:
        direction: Only incoming or outgoing debts, or None for both.
        category: Exact category label, or None for any.
        due_range: Due-date bucket relative to today.
        search: Case-insensitive text matched against counterparty,
            category and description.
    """

    direction: Direction | None = None
    category: str | None = None
    due_range: DueRange = DueRange.ANY
    search: str = ""


@dataclass(frozen=True)
class PersonFilter:
    """Criteria for the counterparty list."""

    standing: PersonStanding | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    search: str = ""


def filter_records(
    records: Iterable[DebtRecord],
    current_user_name: str,
    criteria: RecordFilter,
    now: datetime,
) -> list[DebtRecord]:
    """Return the records matching every criterion, keeping their order."""
    needle = criteria.search.strip().casefold()
    matched: list[DebtRecord] = []
    for record in records:
        classification = classify(record, current_user_name)
        if criteria.direction and classification.direction != criteria.direction:
            continue
        if criteria.category and record.category != criteria.category:
            continue
        if not _in_due_range(record, criteria.due_range, now):
            continue
        if needle and not _matches_search(
            needle,
            classification.counterparty_name,
            record,
        ):
            continue
        matched.append(record)
    return matched


def filter_persons(
    summaries: Iterable[PersonSummary],
    criteria: PersonFilter,
) -> list[PersonSummary]:
    """Return the counterparties matching every criterion."""
    needle = criteria.search.strip().casefold()
    matched: list[PersonSummary] = []
    for summary in summaries:
        if needle and needle not in summary.person_name.casefold():
            continue
        if criteria.standing and summary.standing != criteria.standing:
            continue
        magnitude = abs(summary.net_balance)
        if criteria.min_amount is not None and magnitude < criteria.min_amount:
            continue
        if criteria.max_amount is not None and magnitude > criteria.max_amount:
            continue
        matched.append(summary)
    return matched


_STANDING_ORDER = {
    PersonStanding.OWED: 0,
    PersonStanding.OWE: 1,
    PersonStanding.NEUTRAL: 2,
}


def sort_persons(
    summaries: Iterable[PersonSummary],
    option: PersonSort = PersonSort.STATUS,
) -> list[PersonSummary]:
    """Order counterparties for display.

    ``status`` puts people who owe the user first, then people the user
    owes, then settled ones; ties go by net balance, highest first.
    """
    items = list(summaries)
    if option == PersonSort.NAME_ASC:
        return sorted(items, key=lambda s: s.person_name.casefold())
    if option == PersonSort.NAME_DESC:
        return sorted(items, key=lambda s: s.person_name.casefold(), reverse=True)
    if option == PersonSort.AMOUNT_ASC:
        return sorted(items, key=lambda s: abs(s.net_balance))
    if option == PersonSort.AMOUNT_DESC:
        return sorted(items, key=lambda s: abs(s.net_balance), reverse=True)
    return sorted(
        items,
        key=lambda s: (_STANDING_ORDER[s.standing], -s.net_balance),
    )


def unique_counterparties(
    records: Iterable[DebtRecord],
    current_user_name: str,
) -> list[str]:
    """Return the distinct counterparty names, sorted, without the user."""
    user_key = normalize_person_name(current_user_name)
    names: dict[str, str] = {}
    for record in records:
        for name in (record.debtor_name, record.creditor_name):
            normalized = normalize_person_name(name)
            if not normalized or normalized == user_key:
                continue
            names.setdefault(normalized, " ".join(name.split()))
    return sorted(names.values(), key=str.casefold)


def _in_due_range(record: DebtRecord, due_range: DueRange, now: datetime) -> bool:
    if due_range == DueRange.OVERDUE:
        return record.is_overdue(now)
    today = now.date()
    if due_range == DueRange.NEXT_7_DAYS:
        return today <= record.due_date <= today + timedelta(days=7)
    if due_range == DueRange.NEXT_30_DAYS:
        return today <= record.due_date <= today + timedelta(days=30)
    return True


def _matches_search(needle: str, counterparty: str, record: DebtRecord) -> bool:
    haystacks = (counterparty, record.category or "", record.description or "")
    return any(needle in text.casefold() for text in haystacks)


__all__ = [
    "DueRange",
    "PersonSort",
    "RecordFilter",
    "PersonFilter",
    "filter_records",
    "filter_persons",
    "sort_persons",
    "unique_counterparties",
]
