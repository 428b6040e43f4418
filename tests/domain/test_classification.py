"""Tests for record classification."""

from debt_ledger.domain.models import Direction
from debt_ledger.domain.services.classification import classify
from debt_ledger.domain.services.normalization import counterparty_key


def test_debtor_matching_user_is_outgoing(make_record):
    """The user as debtor makes the record outgoing to the creditor."""
    record = make_record(debtor="You", creditor="Alice")

    result = classify(record, "You")

    assert result.direction == Direction.OUTGOING
    assert result.counterparty_name == "Alice"
    assert result.counterparty_key == counterparty_key("alice")
    assert result.is_self_referential is False


def test_other_debtor_is_incoming(make_record):
    """Any other debtor makes the record incoming from that debtor."""
    record = make_record(debtor="Bob", creditor="You")

    result = classify(record, "You")

    assert result.direction == Direction.INCOMING
    assert result.counterparty_name == "Bob"


def test_name_matching_ignores_case_and_spacing(make_record):
    """Classification compares normalized names."""
    record = make_record(debtor="  you ", creditor="Alice   Smith")

    result = classify(record, "YOU")

    assert result.direction == Direction.OUTGOING
    assert result.counterparty_name == "Alice Smith"
    assert result.counterparty_key == counterparty_key("alice smith")


def test_self_referential_record_is_flagged_and_logged(make_record, logger):
    """Debtor and creditor both the user: outgoing, flagged, no exception."""
    record = make_record(debtor="You", creditor="you")

    result = classify(record, "You", logger)

    assert result.direction == Direction.OUTGOING
    assert result.is_self_referential is True
    assert result.counterparty_name == "you"
    logger.warning.assert_called_once()
