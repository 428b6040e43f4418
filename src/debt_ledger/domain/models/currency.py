"""Currency metadata, rate tables and conversion results."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Currency:
    """Supported display currency.

    Attributes:
        code: ISO-like currency code (e.g. USD).
        name: Human readable name.
        symbol: Currency symbol used in formatted text.
        fraction_digits: 0 for currencies without minor units, 2 otherwise.
        locale: Locale tag driving separators and symbol placement.
    """

    code: str
    name: str
    symbol: str
    fraction_digits: int
    locale: str


SUPPORTED_CURRENCIES: tuple[Currency, ...] = (
    Currency("USD", "US Dollar", "$", 2, "en-US"),
    Currency("EUR", "Euro", "€", 2, "de-DE"),
    Currency("GBP", "British Pound", "£", 2, "en-GB"),
    Currency("CAD", "Canadian Dollar", "C$", 2, "en-CA"),
    Currency("JPY", "Japanese Yen", "¥", 0, "ja-JP"),
    Currency("AUD", "Australian Dollar", "A$", 2, "en-AU"),
    Currency("CHF", "Swiss Franc", "CHF", 2, "de-CH"),
)

_BY_CODE = {currency.code: currency for currency in SUPPORTED_CURRENCIES}


def get_currency(code: str | None) -> Currency | None:
    """Return the supported currency for ``code`` or None."""
    if not code:
        return None
    return _BY_CODE.get(code.strip().upper())


def is_supported_currency(code: str | None) -> bool:
    return get_currency(code) is not None


class RateSourceKind(str, Enum):
    """Where a rate table came from."""

    NETWORK = "network"
    CACHE = "cache"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class RateTable:
    """Multiplicative rates relative to ``base``, fetched at ``fetched_at``.

    The mapping is wrapped read-only so a table handed to readers can never
    change underneath them; refreshes build a new table instead.
    """

    base: str
    rates: Mapping[str, Decimal]
    fetched_at: datetime
    source: RateSourceKind = RateSourceKind.NETWORK

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def age_seconds(self, now: datetime) -> float:
        return (now - self.fetched_at).total_seconds()

    def is_fresh(self, now: datetime, ttl_seconds: float) -> bool:
        return self.age_seconds(now) < ttl_seconds

    def rate_for(self, code: str) -> Decimal | None:
        if code == self.base:
            return Decimal("1")
        rate = self.rates.get(code)
        if rate is None or rate <= 0:
            return None
        return rate


@dataclass(frozen=True)
class Converted:
    """Successful conversion."""

    amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal = field(default=Decimal("1"))

    @property
    def converted(self) -> bool:
        return True


@dataclass(frozen=True)
class Unconverted:
    """Conversion that could not happen; ``amount`` is the original amount."""

    amount: Decimal
    from_currency: str
    to_currency: str
    reason: str

    @property
    def converted(self) -> bool:
        return False


ConversionResult = Converted | Unconverted


__all__ = [
    "Currency",
    "SUPPORTED_CURRENCIES",
    "get_currency",
    "is_supported_currency",
    "RateSourceKind",
    "RateTable",
    "Converted",
    "Unconverted",
    "ConversionResult",
]
