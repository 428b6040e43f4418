"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON payloads or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def try_coerce_decimal(value) -> Decimal | None:
    """Return a Decimal for ``value`` or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = coerce_decimal(value)
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def round_half_up(value: Decimal, digits: int = 0) -> Decimal:
    """Round like a spreadsheet would (0.5 goes away from zero).

    Args:
        value: Value to round.
        digits: Number of fractional digits to keep.

    Returns:
        Decimal: Rounded value.
    """
    exponent = Decimal(1).scaleb(-digits)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


__all__ = ["ZERO", "coerce_decimal", "try_coerce_decimal", "round_half_up"]
