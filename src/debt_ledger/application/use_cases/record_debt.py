"""Use case writing debts through the record store."""

from debt_ledger.application.ports.debt_repository import DebtRepositoryPort
from debt_ledger.application.ports.identity import IdentityPort, Owner
from debt_ledger.domain.errors import IdentityError
from debt_ledger.domain.models import DebtPayload, DebtRecord, DebtStatus
from debt_ledger.domain.services.validation import validate_debt_payload
from debt_ledger.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


class RecordDebtUseCase:
    """Create debts and move them between pending and paid."""

    def __init__(
        self,
        repository: DebtRepositoryPort,
        identity: IdentityPort,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Store receiving the writes.
            identity: Port exposing the signed-in owner.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for recorded user actions.
        """
        self._repository = repository
        self._identity = identity
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    async def create(self, payload: DebtPayload) -> DebtRecord:
        """Validate ``payload`` and store it for the signed-in owner.

        Args:
            payload: Raw debt fields.

        Returns:
            DebtRecord: The stored record.

        Raises:
            ValidationError: If the payload is malformed.
            IdentityError: If nobody is signed in.
        """
        owner = self._owner()
        debt = validate_debt_payload(payload)
        record = await self._repository.create(owner.id, debt)
        self._usage_logger.info(
            f"Debt {record.id} recorded: {record.debtor_name} owes "
            f"{record.creditor_name} {record.amount} {record.currency}"
        )
        return record

    async def mark_paid(self, record_id: str) -> DebtRecord:
        return await self._set_status(record_id, DebtStatus.PAID)

    async def mark_pending(self, record_id: str) -> DebtRecord:
        return await self._set_status(record_id, DebtStatus.PENDING)

    async def delete(self, record_id: str) -> None:
        """Remove a debt of the signed-in owner.

        Raises:
            NotFoundError: If the owner has no such debt.
        """
        owner = self._owner()
        await self._repository.delete(owner.id, record_id)
        self._usage_logger.info(f"Debt {record_id} deleted")

    async def list_for_counterparty(self, name: str) -> list[DebtRecord]:
        """Return the owner's debts naming ``name`` on either side."""
        owner = self._owner()
        return await self._repository.list_by_counterparty(owner.id, name)

    async def _set_status(self, record_id: str, status: DebtStatus) -> DebtRecord:
        owner = self._owner()
        record = await self._repository.update_status(owner.id, record_id, status)
        self._usage_logger.info(f"Debt {record_id} marked {status.value}")
        return record

    def _owner(self) -> Owner:
        owner = self._identity.current_owner()
        if owner is None:
            self._logger.warning("Debt write attempted without a signed-in owner")
            raise IdentityError("No signed-in owner")
        return owner


__all__ = ["RecordDebtUseCase"]
