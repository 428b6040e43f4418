"""CLI adapter to record debts and change their status.

Examples:
    record_debt_cli add --debtor You --creditor Alice --amount 12.50 \
        --currency USD --due 2024-06-01 --category Dinner
    record_debt_cli paid <debt-id>
    record_debt_cli category-add Books --emoji B
"""

import argparse
import asyncio

from debt_ledger.domain.errors import LedgerError
from debt_ledger.domain.models import DebtPayload
from debt_ledger.infrastructure.container import build_ledger_services
from debt_ledger.infrastructure.logging.logger import get_app_logger

CATEGORY_COMMANDS = ("categories", "category-add", "category-delete")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Record debts in the ledger.")
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Record a new debt")
    add.add_argument("--debtor", required=True, help="Who owes the money")
    add.add_argument("--creditor", required=True, help="Who is owed the money")
    add.add_argument("--amount", required=True, help="Positive amount")
    add.add_argument("--currency", default="USD", help="Currency code")
    add.add_argument("--due", required=True, help="Due date (YYYY-MM-DD)")
    add.add_argument("--category", help="Category label")
    add.add_argument("--description", help="Free text")

    for name, help_text in (
        ("paid", "Mark a debt as paid"),
        ("pending", "Mark a debt as pending"),
        ("delete", "Delete a debt"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("debt_id", help="Debt identifier")

    commands.add_parser("categories", help="List the debt categories")
    category_add = commands.add_parser("category-add", help="Add a category")
    category_add.add_argument("name", help="Category name")
    category_add.add_argument("--emoji", help="Symbol shown with the name")
    category_delete = commands.add_parser(
        "category-delete",
        help="Delete a custom category",
    )
    category_delete.add_argument("category_id", help="Category identifier")
    return parser


def _run_category_command(catalog, args) -> str:
    if args.command == "categories":
        return "\n".join(
            f"{category.id}\t{category.emoji} {category.name}"
            + ("" if category.is_default else " (custom)")
            for category in catalog.list_categories()
        )
    if args.command == "category-add":
        category = catalog.add_category(args.name, args.emoji)
        return f"Added category {category.id}: {category.name}"
    catalog.delete_category(args.category_id)
    return f"Deleted category {args.category_id}"


async def _run(services, args) -> str:
    if args.command in CATEGORY_COMMANDS:
        return _run_category_command(services.categories, args)
    use_case = services.record_debt
    if args.command == "add":
        record = await use_case.create(
            DebtPayload(
                debtor_name=args.debtor,
                creditor_name=args.creditor,
                amount=args.amount,
                currency=args.currency,
                due_date=args.due,
                category=args.category,
                description=args.description,
            )
        )
        return f"Recorded debt {record.id}"
    if args.command == "paid":
        record = await use_case.mark_paid(args.debt_id)
        return f"Debt {record.id} is now {record.status.value}"
    if args.command == "pending":
        record = await use_case.mark_pending(args.debt_id)
        return f"Debt {record.id} is now {record.status.value}"
    await use_case.delete(args.debt_id)
    return f"Deleted debt {args.debt_id}"


def main(argv: list[str] | None = None) -> int:
    """Run one ledger write.

    Returns:
        int: Process exit code (1 when the write is rejected).
    """
    logger = get_app_logger()
    args = build_parser().parse_args(argv)
    services = build_ledger_services()
    try:
        message = asyncio.run(_run(services, args))
    except LedgerError as exc:
        logger.error(f"Ledger write rejected: {exc}")
        print(f"Error: {exc}")
        return 1
    print(message)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
