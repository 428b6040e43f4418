"""CLI adapter printing the ledger overview of the configured owner.

The report covers totals, counterparties, categories, the time series and
the analytics counters of the ``LEDGER_PERIOD`` window. Set
``LEDGER_REPORT_CURRENCY`` to report in a currency other than the preferred
one.
"""

import asyncio

from debt_ledger.domain.models import LedgerSnapshot
from debt_ledger.domain.policies.ledger_filters import PersonSort, sort_persons
from debt_ledger.infrastructure.container import build_ledger_services
from debt_ledger.infrastructure.logging.logger import get_app_logger


async def _build_snapshot(services, currency: str | None) -> LedgerSnapshot:
    owner = services.identity.current_owner()
    records = [] if owner is None else await services.repository.list_by_owner(
        owner.id
    )
    return await services.aggregator.build_snapshot(
        records,
        period=services.settings.period,
        currency=currency,
    )


def render_report(snapshot: LedgerSnapshot, fmt) -> list[str]:
    """Return the report lines of ``snapshot``.

    Args:
        snapshot: Snapshot to render.
        fmt: Callable formatting ``(amount, currency)`` as money.

    Returns:
        list[str]: Printable lines.
    """
    code = snapshot.currency_code
    totals = snapshot.totals
    lines = [
        f"Ledger for {snapshot.user_name or '-'} "
        f"(period={snapshot.period.value}, currency={code})",
        f"You owe: {fmt(totals.total_owing, code)}",
        f"Owed to you: {fmt(totals.total_owed, code)}",
        f"Net balance: {fmt(totals.net_balance, code)}",
        "",
        "People:",
    ]
    for person in sort_persons(snapshot.persons, PersonSort.STATUS):
        lines.append(
            f"  {person.person_name}: {fmt(person.net_balance, code)} "
            f"({person.standing.value}, active={person.active_debts}, "
            f"paid={person.paid_debts})"
        )
    lines.append("")
    lines.append("Categories:")
    for item in snapshot.categories:
        lines.append(
            f"  {item.rank}. {item.category}: {fmt(item.amount, code)} "
            f"({item.percentage}%)"
        )
    lines.append("")
    series = snapshot.time_series
    lines.append(
        "Activity: "
        + ", ".join(
            f"{label}={fmt(amount, code)}"
            for label, amount in zip(series.labels, series.buckets)
        )
    )
    delta = snapshot.balance_delta
    sign = "+" if delta.is_positive else "-"
    lines.append(f"Balance change: {sign}{delta.percentage}%")
    insights = snapshot.insights
    lines.append(
        f"Debts: total={insights.total_debts}, paid={insights.paid_debts}, "
        f"overdue={insights.overdue_debts}, upcoming={insights.upcoming_debts}, "
        f"on-time rate={insights.on_time_rate}%"
    )
    for warning in snapshot.warnings:
        lines.append(f"Warning: {warning}")
    return lines


def main() -> None:
    """Print the ledger overview."""
    logger = get_app_logger()
    services = build_ledger_services()
    snapshot = asyncio.run(
        _build_snapshot(services, services.settings.report_currency)
    )
    logger.info(f"Ledger report built with {len(snapshot.records)} records")
    for line in render_report(snapshot, services.normalizer.format):
        print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
