"""Date and time helpers shared across layers."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value) -> datetime:
    """Parse an ISO timestamp (or pass a datetime through) as aware UTC.

    Args:
        value: ``datetime`` or ISO 8601 string, ``Z`` suffix accepted.

    Returns:
        datetime: Timezone-aware datetime.

    Raises:
        ValueError: If the string is not a valid ISO timestamp.
    """
    if isinstance(value, datetime):
        return ensure_aware(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(text))


def parse_iso_date(value) -> date:
    """Parse a ``YYYY-MM-DD`` string (or pass a date through).

    Raises:
        ValueError: If the value is not a real calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


__all__ = ["utc_now", "ensure_aware", "parse_timestamp", "parse_iso_date"]
