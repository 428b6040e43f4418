"""In-memory port implementations shared by application tests."""

import asyncio
from datetime import datetime, timedelta
from decimal import Decimal

from debt_ledger.domain.errors import NetworkError, NotFoundError
from debt_ledger.domain.models import DebtRecord, DebtStatus, NewDebt


class FakePreferenceStore:
    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class FailingPreferenceStore:
    """Store whose every call fails, like a full or unreadable disk."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or OSError("disk full")

    def get(self, key: str) -> str | None:
        raise self.error

    def set(self, key: str, value: str) -> None:
        raise self.error

    def remove(self, key: str) -> None:
        raise self.error


class FakeRateSource:
    """Rate source returning fixed rates or failing on demand."""

    def __init__(self, rates: dict[str, str] | None = None, fail: bool = False):
        self.rates = {
            code: Decimal(value)
            for code, value in (rates or {"USD": "1", "EUR": "0.9"}).items()
        }
        self.fail = fail
        self.calls: list[str] = []

    async def fetch_latest_rates(self, base_currency: str) -> dict[str, Decimal]:
        self.calls.append(base_currency)
        # let concurrent callers pile up behind the cache lock
        await asyncio.sleep(0)
        if self.fail:
            raise NetworkError("rate service unavailable")
        return dict(self.rates)


class Clock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class FakeDebtRepository:
    """Debt repository over a list, with an optional gate on reads."""

    def __init__(self, records: list[DebtRecord] | None = None) -> None:
        self.records = list(records or [])
        self.list_calls = 0
        self.gate: asyncio.Event | None = None
        self.fail_with: Exception | None = None
        self.created: list[tuple[str, NewDebt]] = []
        self.status_updates: list[tuple[str, str, DebtStatus]] = []
        self.deleted: list[tuple[str, str]] = []

    async def list_by_owner(self, owner_id: str) -> list[DebtRecord]:
        self.list_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return [record for record in self.records if record.owner_id == owner_id]

    async def list_by_counterparty(self, owner_id: str, name: str):
        records = await self.list_by_owner(owner_id)
        return [
            record
            for record in records
            if name in (record.debtor_name, record.creditor_name)
        ]

    async def create(self, owner_id: str, debt: NewDebt) -> DebtRecord:
        self.created.append((owner_id, debt))
        now = datetime(2024, 6, 15)
        record = DebtRecord(
            id=f"new-{len(self.created)}",
            owner_id=owner_id,
            debtor_name=debt.debtor_name,
            creditor_name=debt.creditor_name,
            amount=debt.amount,
            currency=debt.currency,
            due_date=debt.due_date,
            status=debt.status,
            created_at=now,
            updated_at=now,
            category=debt.category,
            description=debt.description,
        )
        self.records.append(record)
        return record

    async def update_status(self, owner_id: str, record_id: str, status):
        self.status_updates.append((owner_id, record_id, status))
        for index, record in enumerate(self.records):
            if record.id == record_id and record.owner_id == owner_id:
                updated = record.with_status(status, record.updated_at)
                self.records[index] = updated
                return updated
        raise NotFoundError(f"Debt {record_id} not found")

    async def delete(self, owner_id: str, record_id: str) -> None:
        self.deleted.append((owner_id, record_id))
        self.records = [r for r in self.records if r.id != record_id]
