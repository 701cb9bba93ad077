"""Tests for business-day arithmetic."""

from datetime import date, timedelta

import pytest

from plancal.business_days import (
    add_business_days,
    adjust_date_to_business_day,
    compute_end_date,
    count_business_days,
    get_business_days_in_range,
    get_next_business_day,
    get_previous_business_day,
    is_business_day,
    subtract_business_days,
)
from plancal.exceptions import InvalidArgumentError
from plancal.holidays import HolidayIndex
from plancal.models import AdjustDirection, Holiday

# Two full months covering a year boundary and every weekday several times
SAMPLE_DAYS = [date(2024, 12, 1) + timedelta(days=i) for i in range(62)]


class TestIsBusinessDay:
    """Tests for is_business_day."""

    def test_weekends_are_the_only_non_business_days_without_holidays(self) -> None:
        """With no holidays, only Saturday and Sunday are excluded."""
        for day in SAMPLE_DAYS:
            assert is_business_day(day, []) == (day.weekday() < 5), day

    def test_holiday_is_never_a_business_day(self) -> None:
        """A listed holiday is excluded regardless of weekday."""
        for day in SAMPLE_DAYS:
            assert not is_business_day(day, [Holiday(date=day, name="x")])

    def test_accepts_plain_dates_as_holidays(self) -> None:
        assert not is_business_day(date(2025, 1, 1), [date(2025, 1, 1)])
        assert is_business_day(date(2025, 1, 2), [date(2025, 1, 1)])

    def test_accepts_none_as_no_holidays(self) -> None:
        assert is_business_day(date(2025, 1, 1), None)


class TestAddSubtract:
    """Tests for add_business_days and subtract_business_days."""

    def test_zero_returns_start_unchanged(self, new_year: HolidayIndex) -> None:
        """n = 0 returns the input even when it is not a business day."""
        saturday = date(2025, 1, 4)
        assert add_business_days(saturday, 0, new_year) == saturday
        assert subtract_business_days(saturday, 0, new_year) == saturday

    def test_add_skips_weekend(self) -> None:
        friday = date(2025, 1, 10)
        assert add_business_days(friday, 1, []) == date(2025, 1, 13)

    def test_add_skips_holiday(self, new_year: HolidayIndex) -> None:
        assert add_business_days(date(2024, 12, 31), 1, new_year) == date(2025, 1, 2)

    def test_subtract_skips_holiday_and_weekend(self, new_year: HolidayIndex) -> None:
        monday = date(2025, 1, 6)
        assert subtract_business_days(monday, 1, new_year) == date(2025, 1, 3)
        assert subtract_business_days(monday, 3, new_year) == date(2024, 12, 31)

    def test_negative_count_is_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            add_business_days(date(2025, 1, 6), -1, [])
        with pytest.raises(InvalidArgumentError):
            subtract_business_days(date(2025, 1, 6), -1, [])

    def test_invalid_argument_is_a_value_error(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            add_business_days(date(2025, 1, 6), -5, [])

    def test_round_trip_without_holidays_in_span(self) -> None:
        """subtract(add(d, n), n) == d when d is a business day and no holiday intervenes."""
        for day in SAMPLE_DAYS:
            if not is_business_day(day, []):
                continue
            for n in (1, 2, 5, 9):
                assert subtract_business_days(add_business_days(day, n, []), n, []) == day


class TestCount:
    """Tests for count_business_days and get_business_days_in_range."""

    def test_new_year_week(self, new_year: HolidayIndex) -> None:
        """Monday 12-30 to Friday 01-03 with 01-01 off has four business days."""
        start, end = date(2024, 12, 30), date(2025, 1, 3)
        assert get_business_days_in_range(start, end, new_year) == [
            date(2024, 12, 30),
            date(2024, 12, 31),
            date(2025, 1, 2),
            date(2025, 1, 3),
        ]
        assert count_business_days(start, end, new_year) == 4

    def test_single_day(self, new_year: HolidayIndex) -> None:
        for day in SAMPLE_DAYS:
            expected = 1 if is_business_day(day, new_year) else 0
            assert count_business_days(day, day, new_year) == expected

    def test_inverted_range_is_empty(self) -> None:
        assert count_business_days(date(2025, 1, 10), date(2025, 1, 6), []) == 0
        assert get_business_days_in_range(date(2025, 1, 10), date(2025, 1, 6), []) == []

    def test_range_length_matches_count(self, new_year: HolidayIndex) -> None:
        start = SAMPLE_DAYS[0]
        for end in SAMPLE_DAYS:
            assert len(get_business_days_in_range(start, end, new_year)) == count_business_days(
                start, end, new_year
            )

    def test_weekend_only_range(self) -> None:
        assert count_business_days(date(2025, 1, 4), date(2025, 1, 5), []) == 0


class TestNextPrevious:
    """Tests for get_next_business_day and get_previous_business_day."""

    def test_next_is_strictly_after(self) -> None:
        monday = date(2025, 1, 6)
        assert get_next_business_day(monday, []) == date(2025, 1, 7)

    def test_next_skips_weekend_and_holiday(self) -> None:
        holidays = [date(2025, 1, 13)]
        assert get_next_business_day(date(2025, 1, 10), holidays) == date(2025, 1, 14)

    def test_previous_is_strictly_before(self, new_year: HolidayIndex) -> None:
        assert get_previous_business_day(date(2025, 1, 2), new_year) == date(2024, 12, 31)


class TestAdjust:
    """Tests for adjust_date_to_business_day."""

    def test_business_day_is_unchanged(self) -> None:
        monday = date(2025, 1, 6)
        for direction in AdjustDirection:
            assert adjust_date_to_business_day(monday, [], direction) == monday

    def test_forward_and_backward(self) -> None:
        saturday = date(2025, 1, 4)
        assert adjust_date_to_business_day(saturday, [], AdjustDirection.FORWARD) == date(
            2025, 1, 6
        )
        assert adjust_date_to_business_day(saturday, [], AdjustDirection.BACKWARD) == date(
            2025, 1, 3
        )

    def test_nearest_picks_closer_day(self) -> None:
        """Saturday is one day from Friday, two from Monday."""
        assert adjust_date_to_business_day(date(2025, 1, 4), []) == date(2025, 1, 3)
        assert adjust_date_to_business_day(date(2025, 1, 5), []) == date(2025, 1, 6)

    def test_nearest_tie_goes_forward(self, new_year: HolidayIndex) -> None:
        """Wednesday holiday sits one day from both Tuesday and Thursday."""
        assert adjust_date_to_business_day(date(2025, 1, 1), new_year) == date(2025, 1, 2)


class TestComputeEndDate:
    """Tests for compute_end_date."""

    def test_one_day_timeline_ends_on_start(self) -> None:
        assert compute_end_date(date(2025, 1, 6), 1, []) == date(2025, 1, 6)

    def test_spans_holiday(self, new_year: HolidayIndex) -> None:
        assert compute_end_date(date(2024, 12, 30), 4, new_year) == date(2025, 1, 3)

    def test_requires_at_least_one_day(self) -> None:
        with pytest.raises(InvalidArgumentError):
            compute_end_date(date(2025, 1, 6), 0, [])
