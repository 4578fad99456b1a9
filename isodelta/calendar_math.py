"""Calendar-exact addition of durations to concrete points in time."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from .duration import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    Duration,
    seconds_to_timedelta,
)


def _seconds_between(start: date, end: date) -> int:
    return (end - start).days * SECONDS_PER_DAY


def seconds_in_year(year: int) -> int:
    """Length of the calendar year ``year`` in seconds (366 days for leap years)."""
    return _seconds_between(date(year, 1, 1), date(year + 1, 1, 1))


def seconds_in_month(year: int, month: int) -> int:
    if month == 12:
        following = date(year + 1, 1, 1)
    else:
        following = date(year, month + 1, 1)
    return _seconds_between(date(year, month, 1), following)


def add_duration(anchor: datetime, duration: Duration) -> datetime:
    """Add ``duration`` to ``anchor`` using the real lengths of years and months.

    Whole years and months step along the calendar. A fractional year is
    scaled by the length of the anchor's calendar year, a fractional month by
    the length of the anchor's calendar month, so ``P0.25Y`` spans 91.5 days
    from a date in 2000 and 91.25 days from a date in 2001. Days and smaller
    units are flat second counts.

    Raises ``ValueError`` or ``OverflowError`` when the result or one of the
    reference dates leaves the range ``datetime`` supports.
    """
    year_fraction, whole_years = math.modf(duration.year)
    month_fraction, whole_months = math.modf(duration.month)

    seconds = 0.0
    if year_fraction:
        seconds += year_fraction * seconds_in_year(anchor.year)
    if month_fraction:
        seconds += month_fraction * seconds_in_month(anchor.year, anchor.month)
    seconds += (
        duration.day * SECONDS_PER_DAY
        + duration.hour * SECONDS_PER_HOUR
        + duration.minute * SECONDS_PER_MINUTE
        + duration.second
    )

    stepped = anchor + relativedelta(years=int(whole_years), months=int(whole_months))
    return stepped + seconds_to_timedelta(seconds)


def relative_to(anchor: datetime, duration: Duration) -> timedelta:
    """Exact offset that ``duration`` represents when starting at ``anchor``."""
    return add_duration(anchor, duration) - anchor
