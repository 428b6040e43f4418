"""Debt records and their classification relative to the current user."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class DebtStatus(str, Enum):
    """Persisted status of a debt. Overdue is derived, never stored."""

    PENDING = "pending"
    PAID = "paid"


class Direction(str, Enum):
    """Direction of a debt seen from the current user."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"


@dataclass(frozen=True)
class DebtRecord:
    """A validated debt between the owner's user and a counterparty.

    Attributes:
        id: Record identifier assigned by the store.
        owner_id: Identity of the ledger owner.
        debtor_name: Name of the party who owes the money.
        creditor_name: Name of the party who is owed the money.
        amount: Positive amount in ``currency``.
        currency: Supported currency code.
        due_date: Calendar date the debt is due.
        status: Persisted status.
        created_at: Creation timestamp (aware).
        updated_at: Last update timestamp (aware).
        category: Optional category label.
        description: Optional free text.
    """

    id: str
    owner_id: str
    debtor_name: str
    creditor_name: str
    amount: Decimal
    currency: str
    due_date: date
    status: DebtStatus
    created_at: datetime
    updated_at: datetime
    category: str | None = None
    description: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == DebtStatus.PAID

    @property
    def is_active(self) -> bool:
        return self.status != DebtStatus.PAID

    def is_overdue(self, now: datetime) -> bool:
        """Return True when the debt is unpaid and its due date has passed."""
        return self.is_active and self.due_date < now.date()

    def with_status(self, status: DebtStatus, updated_at: datetime) -> "DebtRecord":
        return replace(self, status=status, updated_at=updated_at)


@dataclass(frozen=True)
class DebtPayload:
    """Unvalidated input for a new debt, as supplied by the UI layer."""

    debtor_name: str
    creditor_name: str
    amount: object
    currency: str
    due_date: object
    status: str | None = None
    category: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class NewDebt:
    """Validated payload ready to be written to the record store."""

    debtor_name: str
    creditor_name: str
    amount: Decimal
    currency: str
    due_date: date
    status: DebtStatus = DebtStatus.PENDING
    category: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Classification:
    """How a record relates to the current user.

    Attributes:
        direction: Outgoing when the user is the debtor, incoming otherwise.
        counterparty_name: Display name of the other party.
        counterparty_key: Stable key derived from the normalized name.
        is_self_referential: True when both parties are the current user.
    """

    direction: Direction
    counterparty_name: str
    counterparty_key: str
    is_self_referential: bool = False

    @property
    def is_outgoing(self) -> bool:
        return self.direction == Direction.OUTGOING


__all__ = [
    "DebtStatus",
    "Direction",
    "DebtRecord",
    "DebtPayload",
    "NewDebt",
    "Classification",
]
