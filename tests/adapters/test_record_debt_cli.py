"""Tests for the record debt CLI."""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from debt_ledger.adapters import record_debt_cli
from debt_ledger.domain.errors import NotFoundError, ValidationError
from debt_ledger.domain.models import Category, DebtRecord, DebtStatus

NOW = datetime(2024, 6, 15, tzinfo=timezone.utc)


def _record(status=DebtStatus.PENDING) -> DebtRecord:
    return DebtRecord(
        id="debt-1",
        owner_id="owner-1",
        debtor_name="You",
        creditor_name="Alice",
        amount=Decimal("12.50"),
        currency="USD",
        due_date=date(2024, 7, 1),
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def use_case(monkeypatch):
    use_case = SimpleNamespace(
        create=AsyncMock(return_value=_record()),
        mark_paid=AsyncMock(return_value=_record(DebtStatus.PAID)),
        mark_pending=AsyncMock(return_value=_record()),
        delete=AsyncMock(return_value=None),
    )
    services = SimpleNamespace(record_debt=use_case)
    monkeypatch.setattr(record_debt_cli, "build_ledger_services", lambda: services)
    monkeypatch.setattr(record_debt_cli, "get_app_logger", MagicMock)
    return use_case


def test_add_builds_payload_from_arguments(use_case, capsys):
    """The add command forwards every option to the use case."""
    code = record_debt_cli.main(
        [
            "add",
            "--debtor",
            "You",
            "--creditor",
            "Alice",
            "--amount",
            "12.50",
            "--due",
            "2024-07-01",
            "--category",
            "Dinner",
        ]
    )

    assert code == 0
    payload = use_case.create.await_args.args[0]
    assert payload.debtor_name == "You"
    assert payload.amount == "12.50"
    assert payload.currency == "USD"
    assert payload.due_date == "2024-07-01"
    assert payload.category == "Dinner"
    assert payload.description is None
    assert capsys.readouterr().out.strip() == "Recorded debt debt-1"


@pytest.mark.parametrize(
    ("command", "expected"),
    [
        ("paid", "Debt debt-1 is now paid"),
        ("pending", "Debt debt-1 is now pending"),
        ("delete", "Deleted debt debt-1"),
    ],
)
def test_status_commands(use_case, capsys, command, expected):
    """paid, pending and delete act on one debt id."""
    assert record_debt_cli.main([command, "debt-1"]) == 0

    assert capsys.readouterr().out.strip() == expected


@pytest.mark.parametrize(
    "error",
    [
        ValidationError("Amount must be a positive number.", field="amount"),
        NotFoundError("Debt debt-9 not found"),
    ],
)
def test_rejected_writes_exit_with_error(use_case, capsys, error):
    """Ledger errors are printed and turn into exit code 1."""
    use_case.mark_paid.side_effect = error

    assert record_debt_cli.main(["paid", "debt-9"]) == 1

    assert capsys.readouterr().out.startswith("Error: ")


def test_parser_requires_a_command():
    """Running without a sub-command is a usage error."""
    with pytest.raises(SystemExit):
        record_debt_cli.build_parser().parse_args([])


@pytest.fixture
def catalog(monkeypatch):
    books = Category(
        id="1718452800000",
        name="Books",
        emoji="B",
        is_default=False,
        created_at="2024-06-15T12:00:00+00:00",
    )
    dinner = Category(
        id="1",
        name="Dinner",
        emoji="D",
        is_default=True,
        created_at="2025-01-01",
    )
    catalog = SimpleNamespace(
        list_categories=MagicMock(return_value=[dinner, books]),
        add_category=MagicMock(return_value=books),
        delete_category=MagicMock(return_value=None),
    )
    services = SimpleNamespace(categories=catalog)
    monkeypatch.setattr(record_debt_cli, "build_ledger_services", lambda: services)
    monkeypatch.setattr(record_debt_cli, "get_app_logger", MagicMock)
    return catalog


def test_categories_lists_defaults_and_custom_entries(catalog, capsys):
    """Custom categories are marked in the listing."""
    assert record_debt_cli.main(["categories"]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "1\tD Dinner",
        "1718452800000\tB Books (custom)",
    ]


def test_category_add_forwards_name_and_emoji(catalog, capsys):
    """category-add stores the new category."""
    assert record_debt_cli.main(["category-add", "Books", "--emoji", "B"]) == 0

    catalog.add_category.assert_called_once_with("Books", "B")
    assert capsys.readouterr().out.strip() == "Added category 1718452800000: Books"


def test_deleting_default_category_exits_with_error(catalog, capsys):
    """A refused category deletion is reported like a rejected write."""
    catalog.delete_category.side_effect = ValidationError(
        "Cannot delete default categories",
        field="category",
    )

    assert record_debt_cli.main(["category-delete", "1"]) == 1

    catalog.delete_category.assert_called_once_with("1")
    assert "Cannot delete default categories" in capsys.readouterr().out
