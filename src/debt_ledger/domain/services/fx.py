"""Currency conversion over rate tables."""

from datetime import datetime
from decimal import Decimal
from typing import Mapping

from debt_ledger.domain.constants import FALLBACK_RATES, FALLBACK_RATES_BASE
from debt_ledger.domain.models import (
    ConversionResult,
    Converted,
    RateSourceKind,
    RateTable,
    Unconverted,
)
from debt_ledger.domain.services.normalization import normalize_currency_code
from debt_ledger.utils.decimal_utils import try_coerce_decimal


def convert_amount(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    table: RateTable | None,
) -> ConversionResult:
    """Convert an amount with a rate table.

    The table may be based on the source currency (multiply by the target
    rate), on the target currency (divide by the source rate) or on a third
    currency (cross rate through the base).

    Args:
        amount: Amount in ``from_currency``.
        from_currency: Source currency code.
        to_currency: Target currency code.
        table: Rate table, or None when no rates are available.

    Returns:
        ConversionResult: ``Converted`` or ``Unconverted`` carrying the
        original amount and the reason.
    """
    source = normalize_currency_code(from_currency) or ""
    target = normalize_currency_code(to_currency) or ""
    if source == target:
        return Converted(amount=amount, from_currency=source, to_currency=target)
    if table is None:
        return Unconverted(
            amount=amount,
            from_currency=source,
            to_currency=target,
            reason="no rate table available",
        )
    source_rate = table.rate_for(source)
    target_rate = table.rate_for(target)
    if source_rate is None or target_rate is None:
        missing = source if source_rate is None else target
        return Unconverted(
            amount=amount,
            from_currency=source,
            to_currency=target,
            reason=f"missing {missing} rate in {table.base} table",
        )
    rate = target_rate / source_rate
    return Converted(
        amount=amount * rate,
        from_currency=source,
        to_currency=target,
        rate=rate,
    )


def parse_rates(raw_rates: Mapping[str, object]) -> dict[str, Decimal]:
    """Keep the positive numeric rates of a raw mapping, keyed by code."""
    rates: dict[str, Decimal] = {}
    for code, value in raw_rates.items():
        normalized = normalize_currency_code(str(code))
        rate = try_coerce_decimal(value)
        if normalized is None or rate is None or rate <= 0:
            continue
        rates[normalized] = rate
    return rates


def rebase_rates(
    rates: Mapping[str, Decimal],
    current_base: str,
    new_base: str,
) -> dict[str, Decimal] | None:
    """Express ``rates`` relative to ``new_base``.

    Returns:
        dict[str, Decimal] | None: Rebased rates, or None when the new base
        has no rate in the current table.
    """
    if new_base == current_base:
        return dict(rates)
    pivot = rates.get(new_base)
    if pivot is None or pivot <= 0:
        return None
    return {code: rate / pivot for code, rate in rates.items()}


def build_fallback_table(base: str, now: datetime) -> RateTable:
    """Return the static fallback table rebased on ``base``.

    A base outside the static table keeps the USD-based figures; conversions
    involving it then come back unconverted.
    """
    rebased = rebase_rates(FALLBACK_RATES, FALLBACK_RATES_BASE, base)
    if rebased is None:
        return RateTable(
            base=FALLBACK_RATES_BASE,
            rates=FALLBACK_RATES,
            fetched_at=now,
            source=RateSourceKind.FALLBACK,
        )
    return RateTable(
        base=base,
        rates=rebased,
        fetched_at=now,
        source=RateSourceKind.FALLBACK,
    )


__all__ = [
    "convert_amount",
    "parse_rates",
    "rebase_rates",
    "build_fallback_table",
]
