"""Tests for the LedgerAggregator use case."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from debt_ledger.application.ports.identity import Owner
from debt_ledger.application.use_cases.get_ledger_overview import (
    LedgerAggregator,
)
from debt_ledger.domain.models import (
    DebtStatus,
    Period,
    PersonStanding,
    RateSourceKind,
    RateTable,
)
from debt_ledger.domain.services.fx import build_fallback_table
from debt_ledger.infrastructure.identity import StaticIdentity

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class FakeNormalizer:
    """Normalizer stub serving one table per base currency."""

    def __init__(self, preferred="USD", source=RateSourceKind.NETWORK):
        self.preferred = preferred
        self.source = source
        self.requested: list[str] = []

    def get_preferred_currency(self) -> str:
        return self.preferred

    async def get_rates(self, base_currency=None) -> RateTable:
        base = base_currency or self.preferred
        self.requested.append(base)
        if self.source == RateSourceKind.FALLBACK:
            return build_fallback_table(base, NOW)
        rates = {"USD": Decimal("1"), "EUR": Decimal("0.5")}
        if base == "EUR":
            rates = {"EUR": Decimal("1"), "USD": Decimal("2")}
        return RateTable(base=base, rates=rates, fetched_at=NOW, source=self.source)


def _aggregator(normalizer=None, identity=None):
    return LedgerAggregator(
        normalizer or FakeNormalizer(),
        identity or StaticIdentity("owner-1", "You"),
        logger=MagicMock(),
        clock=lambda: NOW,
    )


@pytest.mark.asyncio
async def test_snapshot_combines_every_view(make_record):
    """A snapshot carries totals, people, categories and analytics."""
    records = [
        make_record(debtor="You", creditor="Alice", amount="100", category="food"),
        make_record(debtor="Bob", creditor="You", amount="40", category="rent"),
        make_record(
            debtor="Bob",
            creditor="You",
            amount="10",
            status=DebtStatus.PAID,
        ),
    ]

    snapshot = await _aggregator().build_snapshot(records, Period.MONTH)

    assert snapshot.owner_id == "owner-1"
    assert snapshot.user_name == "You"
    assert snapshot.currency_code == "USD"
    assert snapshot.computed_at == NOW
    assert snapshot.totals.total_owing == Decimal("100")
    assert snapshot.totals.total_owed == Decimal("40")
    assert [p.person_name for p in snapshot.persons] == ["Alice", "Bob"]
    assert snapshot.persons[0].standing == PersonStanding.OWE
    assert snapshot.persons[1].paid_debts == 1
    assert [c.category for c in snapshot.categories] == ["food", "rent", "Other"]
    assert snapshot.time_series.total == Decimal("150")
    assert snapshot.insights.total_debts == 3
    assert snapshot.warnings == ()


@pytest.mark.asyncio
async def test_snapshot_converts_into_requested_currency(make_record):
    """Amounts are expressed in the requested display currency."""
    normalizer = FakeNormalizer()
    records = [make_record(debtor="You", creditor="Alice", amount="10")]

    snapshot = await _aggregator(normalizer).build_snapshot(records, currency="eur")

    assert snapshot.currency_code == "EUR"
    assert normalizer.requested == ["EUR"]
    assert snapshot.totals.total_owing == Decimal("5")


@pytest.mark.asyncio
async def test_snapshot_without_owner_reports_zero_totals(make_record):
    """A missing identity degrades to zero totals with a warning."""
    aggregator = _aggregator(identity=StaticIdentity(""))

    snapshot = await aggregator.build_snapshot([make_record()])

    assert snapshot.owner_id == ""
    assert snapshot.user_name is None
    assert snapshot.totals.total_owing == Decimal("0")
    assert snapshot.totals.total_owed == Decimal("0")
    assert snapshot.persons == ()
    assert len(snapshot.warnings) == 1


@pytest.mark.asyncio
async def test_blank_display_name_counts_as_missing_owner(make_record):
    """An owner without a usable name cannot classify records."""
    identity = MagicMock()
    identity.current_owner.return_value = Owner(id="owner-1", display_name="  ")

    snapshot = await _aggregator(identity=identity).build_snapshot([make_record()])

    assert snapshot.user_name is None
    assert snapshot.totals.net_balance == Decimal("0")


@pytest.mark.asyncio
async def test_fallback_rates_add_warning(make_record):
    """Approximate rates are surfaced to the reader."""
    normalizer = FakeNormalizer(source=RateSourceKind.FALLBACK)

    snapshot = await _aggregator(normalizer).build_snapshot([make_record()])

    assert "Exchange rates are approximate (offline fallback)" in snapshot.warnings


@pytest.mark.asyncio
async def test_self_referential_and_unconverted_records_warn(make_record):
    """Suspicious records produce warnings but still count in totals."""
    records = [
        make_record(debtor="You", creditor="you", amount="5"),
        make_record(debtor="You", creditor="Alice", amount="3", currency="XYZ"),
    ]

    snapshot = await _aggregator().build_snapshot(records)

    assert snapshot.totals.total_owing == Decimal("8")
    assert snapshot.totals.unconverted_currencies == ("XYZ",)
    assert [p.person_name for p in snapshot.persons] == ["Alice"]
    assert len(snapshot.warnings) == 2
    assert "XYZ" in snapshot.warnings[1]


@pytest.mark.asyncio
async def test_individual_views_match_snapshot(make_record):
    """The single-view helpers agree with the snapshot."""
    records = [
        make_record(debtor="You", creditor="Alice", amount="30"),
        make_record(debtor="Alice", creditor="You", amount="50"),
    ]
    aggregator = _aggregator()

    snapshot = await aggregator.build_snapshot(records, Period.WEEK)
    totals = await aggregator.totals(records)
    alice = await aggregator.person_summary(records, " alice ")
    series = await aggregator.time_series(records, Period.WEEK)
    delta = await aggregator.balance_delta(records, Period.WEEK)
    categories = await aggregator.category_breakdown(records)

    assert totals == snapshot.totals
    assert alice.net_balance == Decimal("20")
    assert alice.standing == PersonStanding.OWED
    assert series == snapshot.time_series
    assert delta == snapshot.balance_delta
    assert [c.amount for c in categories] == [Decimal("80")]
