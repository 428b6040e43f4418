"""Domain validation helpers."""

from logging import Logger
import re

from debt_ledger.domain.errors import ValidationError
from debt_ledger.domain.models import (
    DebtPayload,
    DebtStatus,
    NewDebt,
    is_supported_currency,
)
from debt_ledger.domain.services.normalization import (
    clean_display_name,
    normalize_currency_code,
)
from debt_ledger.utils.dates import parse_iso_date
from debt_ledger.utils.decimal_utils import try_coerce_decimal

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_debt_payload(payload: DebtPayload) -> NewDebt:
    """Validate a debt payload before it enters the ledger.

    Args:
        payload: Raw payload from the UI layer.

    Returns:
        NewDebt: Cleaned payload with typed fields.

    Raises:
        ValidationError: If any field is missing or malformed.
    """
    debtor_name = clean_display_name(payload.debtor_name)
    if not debtor_name:
        raise ValidationError("Debtor name is required.", field="debtor_name")
    creditor_name = clean_display_name(payload.creditor_name)
    if not creditor_name:
        raise ValidationError(
            "Creditor name is required.",
            field="creditor_name",
        )

    amount = try_coerce_decimal(payload.amount)
    if amount is None or amount <= 0:
        raise ValidationError(
            "Amount must be a positive number.",
            field="amount",
        )

    currency = normalize_currency_code(payload.currency)
    if not is_supported_currency(currency):
        raise ValidationError(
            "Invalid or unsupported currency.",
            field="currency",
        )

    raw_due = payload.due_date
    if isinstance(raw_due, str) and not _ISO_DATE.match(raw_due.strip()):
        raise ValidationError(
            "Due date must be in YYYY-MM-DD format.",
            field="due_date",
        )
    try:
        due_date = parse_iso_date(raw_due)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Invalid due date.", field="due_date") from exc

    status = parse_status(payload.status or DebtStatus.PENDING.value)
    if status is None:
        raise ValidationError("Invalid debt status.", field="status")

    category = (payload.category or "").strip() or None
    description = (payload.description or "").strip() or None
    return NewDebt(
        debtor_name=debtor_name,
        creditor_name=creditor_name,
        amount=amount,
        currency=currency,
        due_date=due_date,
        status=status,
        category=category,
        description=description,
    )


def parse_status(value) -> DebtStatus | None:
    """Return the persisted status for ``value`` or None when unknown."""
    if isinstance(value, DebtStatus):
        return value
    try:
        return DebtStatus(str(value).strip().lower())
    except ValueError:
        return None


def coerce_stored_status(value, record_id: str, logger: Logger) -> DebtStatus:
    """Read a status column written by older clients.

    Rows carrying ``overdue`` predate the derived overdue predicate; they are
    read back as pending. Any other unknown value is treated the same way.

    Args:
        value: Raw status column value.
        record_id: Identifier used in the warning.
        logger: Logger used for warnings.

    Returns:
        DebtStatus: Persisted status to use for aggregation.
    """
    status = parse_status(value)
    if status is not None:
        return status
    logger.warning(
        f"Debt {record_id} has non-persisted status {value!r}; "
        "reading it as pending"
    )
    return DebtStatus.PENDING


__all__ = ["validate_debt_payload", "parse_status", "coerce_stored_status"]
