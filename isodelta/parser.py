"""Grammar parser for ISO-8601 duration literals.

Accepted forms are the basic format ``PnYnMnDTnHnMnS`` (every component
optional, designators in that order, each at most once) and the week format
``PnW``, which cannot be combined with anything else. Values are integers or
decimals using either ``.`` or ``,`` as separator; a point may lead or
trail the digits (``.5``, ``5.``), a comma must sit between them.
"""

from __future__ import annotations

import enum
import math
import re
from typing import Dict, Optional, Tuple

from .duration import Duration

_VALUE = re.compile(r"(?=\.?[0-9])(?:[0-9]*\.[0-9]*|[0-9]+(?:,[0-9]+)?)")

DATE_DESIGNATORS = (("year", "Y"), ("month", "M"), ("day", "D"))
TIME_DESIGNATORS = (("hour", "H"), ("minute", "M"), ("second", "S"))

Fields = Dict[str, float]


class ParseErrorKind(enum.Enum):
    NO_MATCH = "no_match"
    TRAILING_INPUT = "trailing_input"
    EMPTY = "empty"


_DESCRIPTIONS = {
    ParseErrorKind.NO_MATCH: "not an ISO-8601 duration",
    ParseErrorKind.TRAILING_INPUT: "unexpected trailing input",
    ParseErrorKind.EMPTY: "duration has no components",
}


class ParseError(ValueError):
    """Raised when a duration literal cannot be parsed.

    ``offset`` is the UTF-8 byte offset into ``text`` where the first
    non-matching token starts.
    """

    def __init__(self, text: str, offset: int, kind: ParseErrorKind) -> None:
        self.text = text
        self.offset = offset
        self.kind = kind
        super().__init__(f"{_DESCRIPTIONS[kind]} at offset {offset}: {text!r}")

    @classmethod
    def at(cls, text: str, position: int, kind: ParseErrorKind) -> "ParseError":
        return cls(text, len(text[:position].encode("utf-8")), kind)


def _value_with_designator(
    text: str, pos: int, designator: str
) -> Optional[Tuple[float, int]]:
    match = _VALUE.match(text, pos)
    if not match or not text.startswith(designator, match.end()):
        return None
    value = float(match.group().replace(",", "."))
    if not math.isfinite(value):
        return None
    return value, match.end() + len(designator)


def _components(text: str, pos: int, designators) -> Tuple[Fields, int]:
    found: Fields = {}
    for name, designator in designators:
        result = _value_with_designator(text, pos, designator)
        if result is not None:
            found[name], pos = result
    return found, pos


def _week_format(text: str, pos: int) -> Optional[Tuple[Fields, int]]:
    result = _value_with_designator(text, pos, "W")
    if result is None:
        return None
    weeks, pos = result
    return {"day": weeks * 7}, pos


def _basic_format(text: str, pos: int) -> Optional[Tuple[Fields, int]]:
    found, pos = _components(text, pos, DATE_DESIGNATORS)
    if text.startswith("T", pos):
        time_found, pos = _components(text, pos + 1, TIME_DESIGNATORS)
        found.update(time_found)
    if not found:
        return None
    return found, pos


def parse_duration(text: str) -> Duration:
    """Parse ``text`` into a :class:`~isodelta.duration.Duration`.

    Raises
    ------
    ParseError
        With kind ``NO_MATCH`` when the input does not start with ``P``,
        ``EMPTY`` when no designator follows it, and ``TRAILING_INPUT`` when
        a valid duration is followed by anything else (including a second
        week or out-of-order component).
    """
    if not text.startswith("P"):
        raise ParseError.at(text, 0, ParseErrorKind.NO_MATCH)
    result = _week_format(text, 1) or _basic_format(text, 1)
    if result is None:
        raise ParseError.at(text, 1, ParseErrorKind.EMPTY)
    found, end = result
    if end != len(text):
        raise ParseError.at(text, end, ParseErrorKind.TRAILING_INPUT)
    return Duration(**found)


def is_duration_string(text: str) -> bool:
    try:
        parse_duration(text)
    except ParseError:
        return False
    return True
