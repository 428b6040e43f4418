"""CLI adapter printing the ledger net balance whenever it changes.

The coordinator follows in-process changes and is refreshed every
``WATCH_INTERVAL_SECONDS`` (default 30) to pick up writes from other
processes. ``WATCH_ROUNDS`` bounds the number of refreshes; unset means
run until interrupted.
"""

import asyncio

from debt_ledger.domain.models import LedgerSnapshot
from debt_ledger.infrastructure.container import build_ledger_services
from debt_ledger.infrastructure.logging.logger import get_app_logger


async def watch(services, interval_seconds: float, rounds: int | None) -> int:
    """Run the coordinator, refreshing it on a fixed interval.

    Returns:
        int: Number of snapshots printed.
    """
    coordinator = services.build_coordinator()
    printed = 0

    def show(snapshot: LedgerSnapshot) -> None:
        nonlocal printed
        printed += 1
        text = services.normalizer.format(
            snapshot.totals.net_balance,
            snapshot.currency_code,
        )
        print(
            f"[{snapshot.computed_at.isoformat(timespec='seconds')}] "
            f"net balance {text} across {len(snapshot.records)} debts"
        )

    remove = coordinator.add_listener(show)
    await coordinator.start()
    done = 0
    try:
        while rounds is None or done < rounds:
            await asyncio.sleep(interval_seconds)
            await coordinator.refresh()
            done += 1
    finally:
        remove()
        coordinator.stop()
        await coordinator.wait_idle()
    return printed


def main() -> None:
    """Watch the configured owner's ledger."""
    logger = get_app_logger()
    services = build_ledger_services()
    settings = services.settings
    try:
        asyncio.run(
            watch(
                services,
                settings.watch_interval_seconds,
                settings.watch_rounds,
            )
        )
    except KeyboardInterrupt:
        logger.info("Ledger watch interrupted")


if __name__ == "__main__":  # pragma: no cover
    main()
