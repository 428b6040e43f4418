"""CLI adapter forcing a refresh of the cached exchange rates.

``RATES_BASE`` selects the base currency; the preferred display currency is
used otherwise.
"""

import asyncio

from debt_ledger.infrastructure.container import build_ledger_services
from debt_ledger.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Fetch fresh rates and print the resulting table."""
    logger = get_app_logger()
    services = build_ledger_services()
    base = services.settings.rates_base

    table = asyncio.run(services.normalizer.refresh_rates(base))

    logger.info(f"Rate table for {table.base} from {table.source.value}")
    print(
        f"Rates for {table.base} ({table.source.value}, "
        f"fetched {table.fetched_at.isoformat()}):"
    )
    for code in sorted(table.rates):
        print(f"  {code}: {table.rates[code]}")


if __name__ == "__main__":  # pragma: no cover
    main()
