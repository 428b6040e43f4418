"""Application port for exchange rate lookups."""

from decimal import Decimal
from typing import Protocol


class RateSourcePort(Protocol):
    """Port fetching the latest rates relative to a base currency."""

    async def fetch_latest_rates(self, base_currency: str) -> dict[str, Decimal]:
        """Return ``{code: rate}`` for ``base_currency``.

        Raises:
            NetworkError: On transport errors and non-success responses.
        """


__all__ = ["RateSourcePort"]
