"""Application port for the debt record store."""

from typing import Protocol

from debt_ledger.domain.models import DebtRecord, DebtStatus, NewDebt


class DebtRepositoryPort(Protocol):
    """Port exposing the authoritative debt records of an owner."""

    async def list_by_owner(self, owner_id: str) -> list[DebtRecord]:
        """Return every record of the owner, newest first."""

    async def create(self, owner_id: str, debt: NewDebt) -> DebtRecord:
        """Store a validated debt and return the stored record."""

    async def update_status(
        self,
        owner_id: str,
        record_id: str,
        status: DebtStatus,
    ) -> DebtRecord:
        """Set the status of a record and return the updated record."""

    async def delete(self, owner_id: str, record_id: str) -> None:
        """Remove a record."""

    async def list_by_counterparty(
        self,
        owner_id: str,
        name: str,
    ) -> list[DebtRecord]:
        """Return records where ``name`` is the debtor or the creditor."""


__all__ = ["DebtRepositoryPort"]
