"""Decomposed ISO-8601 duration values and their fixed-length conversions."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import datetime, timedelta
from typing import Optional

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * 60 * 60
YEAR_IN_SECONDS = 31556952  # mean gregorian year
MONTH_IN_DAYS = 30.42


def _round(value: float) -> int:
    # Half away from zero; every magnitude here is non-negative.
    return math.floor(value + 0.5)


def seconds_to_timedelta(seconds: float) -> timedelta:
    """Build a timedelta from whole seconds plus the sub-second remainder.

    Splitting first keeps float error out of the whole-second part.
    """
    fraction, whole = math.modf(seconds)
    return timedelta(seconds=int(whole), microseconds=round(fraction * 1_000_000))


@dataclass(frozen=True)
class Duration:
    """An ISO-8601 duration kept as six independent magnitudes.

    The fields are not normalized: ``P1Y`` and ``P12M`` are different values
    because a year or a month has no fixed length without a calendar anchor.
    """

    year: float = 0.0
    month: float = 0.0
    day: float = 0.0
    hour: float = 0.0
    minute: float = 0.0
    second: float = 0.0

    def __post_init__(self) -> None:
        for field in fields(self):
            value = float(getattr(self, field.name))
            if not math.isfinite(value) or value < 0:
                raise ValueError(
                    f"Duration {field.name} must be a finite non-negative number"
                )
            object.__setattr__(self, field.name, value)

    @classmethod
    def parse(cls, text: str) -> "Duration":
        from .parser import parse_duration

        return parse_duration(text)

    def __str__(self) -> str:
        from .formatting import format_duration

        return format_duration(self)

    def __radd__(self, other):
        if not isinstance(other, datetime):
            return NotImplemented
        from .calendar_math import add_duration

        return add_duration(other, self)

    @property
    def has_calendar_part(self) -> bool:
        return bool(self.year or self.month)

    @property
    def has_time_part(self) -> bool:
        return bool(self.hour or self.minute or self.second)

    def num_years(self) -> Optional[float]:
        if self.has_time_part:
            return None
        return self.year + self.month / 12

    def num_months(self) -> Optional[float]:
        if self.has_time_part:
            return None
        return self.year * 12 + self.month

    def num_weeks(self) -> Optional[float]:
        days = self.num_days()
        if days is None:
            return None
        return days / 7

    def num_days(self) -> Optional[float]:
        if self.has_calendar_part:
            return None
        return (
            self.day
            + self.hour / 24
            + self.minute / (24 * 60)
            + self.second / SECONDS_PER_DAY
        )

    def num_hours(self) -> Optional[float]:
        if self.has_calendar_part:
            return None
        return (
            self.day * 24
            + self.hour
            + self.minute / 60
            + self.second / SECONDS_PER_HOUR
        )

    def num_minutes(self) -> Optional[float]:
        if self.has_calendar_part:
            return None
        return (
            self.day * 24 * 60
            + self.hour * 60
            + self.minute
            + self.second / SECONDS_PER_MINUTE
        )

    def num_seconds(self) -> Optional[float]:
        if self.has_calendar_part:
            return None
        return (
            self.second
            + self.minute * SECONDS_PER_MINUTE
            + self.hour * SECONDS_PER_HOUR
            + self.day * SECONDS_PER_DAY
        )

    def to_timedelta(self) -> Optional[timedelta]:
        """Exact wall-clock delta, or ``None`` when a year or month is present.

        Raises ``OverflowError`` when the total is beyond what ``timedelta``
        can hold.
        """
        seconds = self.num_seconds()
        if seconds is None:
            return None
        return seconds_to_timedelta(seconds)

    def to_fixed_timedelta(self) -> timedelta:
        """Approximate the whole duration with constant unit lengths.

        A year counts as 31,556,952 seconds and a month as 30.42 days. Each
        component is rounded to whole seconds on its own to keep the floats
        small; the fractional part of ``second`` survives to the millisecond.
        """
        fraction, whole = math.modf(self.second)
        total = (
            _round(self.year * YEAR_IN_SECONDS)
            + _round(self.month * MONTH_IN_DAYS * SECONDS_PER_DAY)
            + _round(self.day * SECONDS_PER_DAY)
            + _round(self.hour * SECONDS_PER_HOUR)
            + _round(self.minute * SECONDS_PER_MINUTE)
            + int(whole)
        )
        return timedelta(milliseconds=total * 1000 + _round(fraction * 1000))
