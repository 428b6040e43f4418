"""Time windows, buckets and labels for analytics periods."""

import calendar
from datetime import datetime, timedelta

from debt_ledger.domain.constants import (
    ALL_PERIOD_START_YEAR,
    TIME_SERIES_BUCKETS,
)
from debt_ledger.domain.models import Period, TimeWindow

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_period(value: str | Period | None, default: Period = Period.MONTH) -> Period:
    """Return the period for ``value``; unknown values fall back to ``default``."""
    if isinstance(value, Period):
        return value
    if not value:
        return default
    try:
        return Period(value.strip().upper())
    except ValueError:
        return default


def shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by a number of calendar months.

    The day of month is clamped to the length of the target month, so
    March 31 minus one month is the last day of February.
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period: Period, end: datetime) -> datetime:
    """Return the start of the window of ``period`` ending at ``end``."""
    if period == Period.HOUR:
        return end - timedelta(hours=1)
    if period == Period.DAY:
        return end - timedelta(days=1)
    if period == Period.WEEK:
        return end - timedelta(days=7)
    if period == Period.MONTH:
        return shift_months(end, -1)
    if period == Period.YEAR:
        return shift_months(end, -12)
    return shift_months(end, (ALL_PERIOD_START_YEAR - end.year) * 12)


def period_window(period: Period, now: datetime) -> TimeWindow:
    """Return the window ``[now - span, now]`` for ``period``."""
    return TimeWindow(start=period_start(period, now), end=now)


def previous_window(period: Period, window: TimeWindow) -> TimeWindow:
    """Return the window of equal calendar length right before ``window``.

    ``ALL`` has no meaningful predecessor; its previous window spans one
    month before the start, matching the default branch of month periods.
    """
    if period == Period.ALL:
        return TimeWindow(start=shift_months(window.start, -1), end=window.start)
    return TimeWindow(start=period_start(period, window.start), end=window.start)


def split_window(
    window: TimeWindow,
    count: int = TIME_SERIES_BUCKETS,
) -> list[TimeWindow]:
    """Split ``window`` into ``count`` equal consecutive sub-windows."""
    step = (window.end - window.start) / count
    edges = [window.start + step * index for index in range(count)]
    edges.append(window.end)
    return [
        TimeWindow(start=edges[index], end=edges[index + 1])
        for index in range(count)
    ]


def bucket_label(period: Period, moment: datetime) -> str:
    """Return the chart label of a bucket starting at ``moment``."""
    if period in (Period.HOUR, Period.DAY):
        return f"{moment.hour:02d}h"
    if period == Period.WEEK:
        return _WEEKDAYS[moment.weekday()]
    if period == Period.MONTH:
        return str(moment.day)
    return _MONTHS[moment.month - 1]


__all__ = [
    "parse_period",
    "shift_months",
    "period_start",
    "period_window",
    "previous_window",
    "split_window",
    "bucket_label",
]
