import dataclasses
import math
from datetime import timedelta

import pytest

from isodelta.duration import Duration, seconds_to_timedelta
from isodelta.parser import parse_duration


class TestConstruction:
    def test_fields_default_to_zero_and_become_floats(self):
        duration = Duration(1, day=2)
        assert duration.year == 1.0
        assert isinstance(duration.year, float)
        assert duration.day == 2.0
        assert duration.second == 0.0

    @pytest.mark.parametrize("value", [-1, math.inf, math.nan])
    def test_rejects_negative_and_non_finite(self, value):
        with pytest.raises(ValueError):
            Duration(hour=value)

    def test_is_immutable_and_hashable(self):
        duration = Duration(year=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            duration.year = 2  # type: ignore[misc]
        assert len({Duration(year=1), Duration(year=1.0)}) == 1

    def test_years_and_months_are_not_normalized(self):
        assert Duration(year=1) != Duration(month=12)
        assert parse_duration("P1Y") != parse_duration("P12M")


class TestAccessors:
    def test_year_and_month_counts(self):
        duration = Duration(year=1, month=6)
        assert duration.num_years() == pytest.approx(1.5)
        assert duration.num_months() == pytest.approx(18)

    def test_year_counts_ignore_days(self):
        assert Duration(year=2, day=3).num_years() == pytest.approx(2)

    def test_time_components_make_year_counts_undefined(self):
        duration = Duration(year=1, second=30)
        assert duration.num_years() is None
        assert duration.num_months() is None
        assert duration.num_days() is None
        assert duration.num_seconds() is None

    def test_fixed_unit_counts(self):
        duration = Duration(day=1, hour=1, minute=30, second=36)
        assert duration.num_seconds() == pytest.approx(86400 + 3600 + 1800 + 36)
        assert duration.num_minutes() == pytest.approx(1440 + 60 + 30 + 0.6)
        assert duration.num_hours() == pytest.approx(25.51)
        assert duration.num_days() == pytest.approx(1 + 5436 / 86400)
        assert duration.num_weeks() == pytest.approx((1 + 5436 / 86400) / 7)

    @pytest.mark.parametrize(
        "duration",
        [Duration(year=1), Duration(month=0.5, day=1), Duration(year=1, hour=2)],
    )
    def test_calendar_components_make_fixed_counts_undefined(self, duration):
        assert duration.num_weeks() is None
        assert duration.num_days() is None
        assert duration.num_hours() is None
        assert duration.num_minutes() is None
        assert duration.num_seconds() is None
        assert duration.to_timedelta() is None

    def test_week_duration_counts(self):
        week = parse_duration("P2W")
        assert week.num_weeks() == pytest.approx(2)
        assert week.num_days() == pytest.approx(14)


class TestTimedelta:
    def test_week_converts_exactly(self):
        assert parse_duration("P1W").to_timedelta() == timedelta(weeks=1)

    def test_sub_second_remainder_is_kept(self):
        assert parse_duration("PT1.5S").to_timedelta() == timedelta(
            seconds=1, microseconds=500000
        )
        assert parse_duration("P1DT0.25S").to_timedelta() == timedelta(
            days=1, microseconds=250000
        )

    def test_seconds_to_timedelta_splits_whole_and_fraction(self):
        assert seconds_to_timedelta(7905600.0) == timedelta(days=91.5)
        assert seconds_to_timedelta(0.000001) == timedelta(microseconds=1)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("P10Y10M10DT10H10M10S", timedelta(seconds=342753010)),
            ("P10Y10M10DT10H10M10.5S", timedelta(milliseconds=342753010500)),
            ("P10.5Y10M10DT10H10M10S", timedelta(seconds=358531486)),
            ("P10Y10.5M10DT10H10M10S", timedelta(seconds=344067154)),
            ("P10Y10M10.5DT10H10M10S", timedelta(seconds=342796210)),
            ("P10Y10M10DT10.5H10M10S", timedelta(seconds=342754810)),
            ("PT5.5H5.5M", timedelta(seconds=5.5 * 3600 + 5.5 * 60)),
        ],
    )
    def test_fixed_approximation(self, text, expected):
        assert parse_duration(text).to_fixed_timedelta() == expected

    def test_fixed_approximation_matches_exact_without_calendar_part(self):
        duration = parse_duration("P3DT4H5M6S")
        assert duration.to_fixed_timedelta() == duration.to_timedelta()

    def test_totals_beyond_timedelta_range_overflow(self):
        with pytest.raises(OverflowError):
            Duration(day=1e12).to_timedelta()
        with pytest.raises(OverflowError):
            Duration(year=1e11).to_fixed_timedelta()
