import pytest

from isodelta.duration import Duration
from isodelta.formatting import format_duration, format_number
from isodelta.parser import parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.5, "0.5"),
        (10.0, "10"),
        (2.25, "2.25"),
        (1e-05, "0.00001"),
        (1e16, "10000000000000000"),
        (100, "100"),
    ],
)
def test_format_number_is_positional_without_trailing_zeros(value, expected):
    assert format_number(value) == expected


def test_zero_fields_are_omitted():
    assert format_duration(Duration(year=1, second=5)) == "P1YT5S"
    assert format_duration(Duration(month=1)) == "P1M"
    assert format_duration(Duration(minute=1)) == "PT1M"
    assert format_duration(Duration(day=3)) == "P3D"


def test_weeks_are_written_as_days():
    assert format_duration(parse_duration("P12W")) == "P84D"


def test_empty_duration_is_still_parseable():
    assert format_duration(Duration()) == "PT0S"
    assert parse_duration(format_duration(Duration())) == Duration()


def test_decimal_comma_is_written_with_a_point():
    assert format_duration(parse_duration("P0,5Y")) == "P0.5Y"


def test_str_uses_canonical_text():
    assert str(Duration(3, 6, 4, 12, 30, 5)) == "P3Y6M4DT12H30M5S"


@pytest.mark.parametrize(
    "text",
    [
        "P3Y6M4DT12H30M5S",
        "P0.5Y0.5M",
        "PT5.5H5.5M",
        "P1DT0.001S",
        "P23DT23H",
        "PT36H",
        "P0.1Y0.2M0.3DT0.4H0.5M0.6S",
    ],
)
def test_canonical_text_round_trips(text):
    duration = parse_duration(text)
    assert format_duration(duration) == text
    assert parse_duration(format_duration(duration)) == duration


def test_constructed_values_round_trip():
    duration = Duration(year=1 / 3, hour=1e-05, second=123456789.125)
    assert parse_duration(format_duration(duration)) == duration
