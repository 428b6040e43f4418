"""Classification of debt records relative to the current user."""

from logging import Logger

from debt_ledger.domain.models import Classification, DebtRecord, Direction
from debt_ledger.domain.services.normalization import (
    clean_display_name,
    counterparty_key,
    same_person,
)


def classify(
    record: DebtRecord,
    current_user_name: str,
    logger: Logger | None = None,
) -> Classification:
    """Classify a record as incoming or outgoing for the current user.

    The record is outgoing when the current user is the debtor; every other
    record is incoming and its counterparty is the debtor. A record where the
    user is both debtor and creditor is outgoing with the user as its own
    counterparty and is flagged as self-referential.

    Args:
        record: Debt record to classify.
        current_user_name: Display name of the signed-in user.
        logger: Optional logger warned about self-referential records.

    Returns:
        Classification: Direction and counterparty of the record.
    """
    if same_person(record.debtor_name, current_user_name):
        counterparty = record.creditor_name
        is_self = same_person(record.creditor_name, current_user_name)
        if is_self and logger is not None:
            logger.warning(
                f"Debt {record.id} names {current_user_name!r} as both "
                "debtor and creditor"
            )
        return Classification(
            direction=Direction.OUTGOING,
            counterparty_name=clean_display_name(counterparty),
            counterparty_key=counterparty_key(counterparty),
            is_self_referential=is_self,
        )
    counterparty = record.debtor_name
    return Classification(
        direction=Direction.INCOMING,
        counterparty_name=clean_display_name(counterparty),
        counterparty_key=counterparty_key(counterparty),
    )


__all__ = ["classify"]
