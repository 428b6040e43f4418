"""Shared fixtures for the ledger tests."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
import itertools
from unittest.mock import MagicMock

import pytest

from debt_ledger.domain.models import DebtRecord, DebtStatus

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_record():
    """Return a factory building debt records with sensible defaults."""
    ids = itertools.count(1)

    def _make(
        debtor: str = "You",
        creditor: str = "Alice",
        amount="100",
        currency: str = "USD",
        status: DebtStatus = DebtStatus.PENDING,
        category: str | None = None,
        created_at: datetime | None = None,
        due_date: date | None = None,
        description: str | None = None,
        owner_id: str = "owner-1",
    ) -> DebtRecord:
        created = created_at or NOW - timedelta(days=1)
        return DebtRecord(
            id=f"debt-{next(ids)}",
            owner_id=owner_id,
            debtor_name=debtor,
            creditor_name=creditor,
            amount=Decimal(str(amount)),
            currency=currency,
            due_date=due_date or date(2024, 7, 1),
            status=status,
            created_at=created,
            updated_at=created,
            category=category,
            description=description,
        )

    return _make
