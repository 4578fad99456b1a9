"""Canonical ISO-8601 text for durations."""

from decimal import Decimal

from .duration import Duration

ZERO_DURATION = "PT0S"


def format_number(value: float) -> str:
    """Positional decimal text for ``value`` with no exponent or trailing zeros.

    Goes through ``repr`` so the shortest string that reads back to the same
    float is used.
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_duration(duration: Duration) -> str:
    date_part = "".join(
        f"{format_number(value)}{designator}"
        for value, designator in (
            (duration.year, "Y"),
            (duration.month, "M"),
            (duration.day, "D"),
        )
        if value
    )
    time_part = "".join(
        f"{format_number(value)}{designator}"
        for value, designator in (
            (duration.hour, "H"),
            (duration.minute, "M"),
            (duration.second, "S"),
        )
        if value
    )
    if not date_part and not time_part:
        return ZERO_DURATION
    if time_part:
        return f"P{date_part}T{time_part}"
    return f"P{date_part}"
