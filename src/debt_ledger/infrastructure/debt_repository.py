"""SQLAlchemy-backed repository for debt records."""

import asyncio
from datetime import datetime
from typing import Callable
import uuid

from sqlalchemy import text

from debt_ledger.application.ports.change_feed import ChangeEvent, ChangeKind
from debt_ledger.application.ports.database import DatabaseEnginePort
from debt_ledger.application.ports.debt_repository import DebtRepositoryPort
from debt_ledger.domain.errors import NotFoundError
from debt_ledger.domain.models import DebtRecord, DebtStatus, NewDebt
from debt_ledger.domain.services.normalization import same_person
from debt_ledger.domain.services.validation import coerce_stored_status
from debt_ledger.infrastructure.change_feed import InMemoryChangeFeed
from debt_ledger.infrastructure.logging.logger import get_app_logger
from debt_ledger.utils.dates import parse_iso_date, parse_timestamp, utc_now
from debt_ledger.utils.decimal_utils import coerce_decimal


CREATE_DEBTS_SQL = """
CREATE TABLE IF NOT EXISTS debts (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    debtor_name TEXT NOT NULL,
    creditor_name TEXT NOT NULL,
    amount NUMERIC NOT NULL,
    currency TEXT NOT NULL,
    due_date TEXT NOT NULL,
    status TEXT NOT NULL,
    category TEXT,
    description TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

SELECT_DEBTS_SQL = text(
    """
    SELECT id, user_id, debtor_name, creditor_name, amount, currency,
        due_date, status, category, description, created_at, updated_at
    FROM debts
    WHERE user_id = :owner_id
    ORDER BY created_at DESC
    """
)

SELECT_DEBT_SQL = text(
    """
    SELECT id, user_id, debtor_name, creditor_name, amount, currency,
        due_date, status, category, description, created_at, updated_at
    FROM debts
    WHERE user_id = :owner_id AND id = :id
    """
)

INSERT_DEBT_SQL = text(
    """
    INSERT INTO debts (
        id,
        user_id,
        debtor_name,
        creditor_name,
        amount,
        currency,
        due_date,
        status,
        category,
        description,
        created_at,
        updated_at
    )
    VALUES (
        :id,
        :user_id,
        :debtor_name,
        :creditor_name,
        :amount,
        :currency,
        :due_date,
        :status,
        :category,
        :description,
        :created_at,
        :updated_at
    )
    """
)

UPDATE_STATUS_SQL = text(
    """
    UPDATE debts
    SET status = :status, updated_at = :updated_at
    WHERE user_id = :owner_id AND id = :id
    """
)

DELETE_DEBT_SQL = text("DELETE FROM debts WHERE user_id = :owner_id AND id = :id")


class SqlAlchemyDebtRepository(DebtRepositoryPort):
    """Debt store backed by the ``debts`` table.

    Queries run in worker threads. After each successful write a change event
    is published to the optional change feed.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        change_feed: InMemoryChangeFeed | None = None,
        logger=None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            change_feed: Feed notified after inserts, updates and deletes.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the current aware datetime.
        """
        self._db_port = db_port
        self._change_feed = change_feed
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._prepared = False

    def prepare(self) -> None:
        """Ensure the debts table exists."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_DEBTS_SQL)
        self._prepared = True

    async def list_by_owner(self, owner_id: str) -> list[DebtRecord]:
        return await asyncio.to_thread(self._select_all, owner_id)

    async def list_by_counterparty(
        self,
        owner_id: str,
        name: str,
    ) -> list[DebtRecord]:
        """Return records naming ``name`` as debtor or creditor.

        Names match case-insensitively after whitespace normalization.
        """
        records = await self.list_by_owner(owner_id)
        return [
            record
            for record in records
            if same_person(record.debtor_name, name)
            or same_person(record.creditor_name, name)
        ]

    async def create(self, owner_id: str, debt: NewDebt) -> DebtRecord:
        record = await asyncio.to_thread(self._insert, owner_id, debt)
        self._notify(ChangeKind.INSERT, owner_id, record.id)
        return record

    async def update_status(
        self,
        owner_id: str,
        record_id: str,
        status: DebtStatus,
    ) -> DebtRecord:
        """Set the status of a record.

        Raises:
            NotFoundError: If the owner has no record with ``record_id``.
        """
        record = await asyncio.to_thread(
            self._update_status,
            owner_id,
            record_id,
            status,
        )
        self._notify(ChangeKind.UPDATE, owner_id, record_id)
        return record

    async def delete(self, owner_id: str, record_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the owner has no record with ``record_id``.
        """
        await asyncio.to_thread(self._delete, owner_id, record_id)
        self._notify(ChangeKind.DELETE, owner_id, record_id)

    def _select_all(self, owner_id: str) -> list[DebtRecord]:
        self._ensure_prepared()
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_DEBTS_SQL, {"owner_id": owner_id}).all()
        return [self._to_record(row) for row in rows]

    def _insert(self, owner_id: str, debt: NewDebt) -> DebtRecord:
        self._ensure_prepared()
        now = self._clock()
        record = DebtRecord(
            id=uuid.uuid4().hex,
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
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                INSERT_DEBT_SQL,
                {
                    "id": record.id,
                    "user_id": owner_id,
                    "debtor_name": record.debtor_name,
                    "creditor_name": record.creditor_name,
                    "amount": str(record.amount),
                    "currency": record.currency,
                    "due_date": record.due_date.isoformat(),
                    "status": record.status.value,
                    "category": record.category,
                    "description": record.description,
                    "created_at": now.isoformat(),
                    "updated_at": now.isoformat(),
                },
            )
        self._logger.info(f"Inserted debt {record.id} for owner {owner_id}")
        return record

    def _update_status(
        self,
        owner_id: str,
        record_id: str,
        status: DebtStatus,
    ) -> DebtRecord:
        self._ensure_prepared()
        params = {"owner_id": owner_id, "id": record_id}
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                UPDATE_STATUS_SQL,
                {
                    **params,
                    "status": status.value,
                    "updated_at": self._clock().isoformat(),
                },
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Debt {record_id} not found")
            row = conn.execute(SELECT_DEBT_SQL, params).one()
        return self._to_record(row)

    def _delete(self, owner_id: str, record_id: str) -> None:
        self._ensure_prepared()
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                DELETE_DEBT_SQL,
                {"owner_id": owner_id, "id": record_id},
            )
        if result.rowcount == 0:
            raise NotFoundError(f"Debt {record_id} not found")

    def _to_record(self, row) -> DebtRecord:
        return DebtRecord(
            id=str(row.id),
            owner_id=str(row.user_id),
            debtor_name=row.debtor_name,
            creditor_name=row.creditor_name,
            amount=coerce_decimal(row.amount),
            currency=row.currency,
            due_date=parse_iso_date(row.due_date),
            status=coerce_stored_status(row.status, row.id, self._logger),
            created_at=parse_timestamp(row.created_at),
            updated_at=parse_timestamp(row.updated_at),
            category=row.category,
            description=row.description,
        )

    def _notify(self, kind: ChangeKind, owner_id: str, record_id: str) -> None:
        if self._change_feed is None:
            return
        self._change_feed.publish(
            ChangeEvent(kind=kind, owner_id=owner_id, record_id=record_id)
        )

    def _ensure_prepared(self) -> None:
        if not self._prepared:
            self.prepare()


__all__ = ["SqlAlchemyDebtRepository", "CREATE_DEBTS_SQL"]
