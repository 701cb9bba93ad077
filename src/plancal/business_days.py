"""Business-day arithmetic over a Mon-Fri week and an explicit holiday set.

A business day is a weekday (Monday to Friday) that is not a holiday. Every
function takes the holiday set explicitly and keeps no state between calls.

Walks are linear in the number of calendar days spanned. The holiday set has
no periodic structure, so there is no closed-form shortcut to take.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from .exceptions import InvalidArgumentError
from .holidays import HolidayIndex, HolidayLike
from .models import AdjustDirection

Holidays = HolidayIndex | Iterable[HolidayLike] | None

SATURDAY = 5  # date.weekday() numbering, Monday == 0
ONE_DAY = timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= SATURDAY


def is_business_day(day: date, holidays: Holidays) -> bool:
    """Check if a date is a business day (Mon-Fri and not a holiday)."""
    if is_weekend(day):
        return False
    return not HolidayIndex.coerce(holidays).is_holiday(day)


def add_business_days(start: date, count: int, holidays: Holidays) -> date:
    """Walk forward from start until count business days have been passed.

    Args:
        start: Day to walk from (not itself counted)
        count: Number of business days to add, must be >= 0
        holidays: Active holiday set

    Returns:
        The count-th business day after start, or start itself when count is 0

    Raises:
        InvalidArgumentError: If count is negative
    """
    if count < 0:
        raise InvalidArgumentError(
            f"Count must be non-negative, got {count}. Use subtract_business_days instead."
        )
    if count == 0:
        return start

    index = HolidayIndex.coerce(holidays)
    current = start
    added = 0
    while added < count:
        current += ONE_DAY
        if is_business_day(current, index):
            added += 1
    return current


def subtract_business_days(end: date, count: int, holidays: Holidays) -> date:
    """Walk backward from end until count business days have been passed.

    Raises:
        InvalidArgumentError: If count is negative
    """
    if count < 0:
        raise InvalidArgumentError(
            f"Count must be non-negative, got {count}. Use add_business_days instead."
        )
    if count == 0:
        return end

    index = HolidayIndex.coerce(holidays)
    current = end
    subtracted = 0
    while subtracted < count:
        current -= ONE_DAY
        if is_business_day(current, index):
            subtracted += 1
    return current


def count_business_days(start: date, end: date, holidays: Holidays) -> int:
    """Count business days in [start, end] inclusive.

    An inverted range is empty rather than an error, so this returns 0.
    """
    if start > end:
        return 0

    index = HolidayIndex.coerce(holidays)
    count = 0
    current = start
    while current <= end:
        if is_business_day(current, index):
            count += 1
        current += ONE_DAY
    return count


def get_next_business_day(day: date, holidays: Holidays) -> date:
    """First business day strictly after day."""
    index = HolidayIndex.coerce(holidays)
    current = day + ONE_DAY
    while not is_business_day(current, index):
        current += ONE_DAY
    return current


def get_previous_business_day(day: date, holidays: Holidays) -> date:
    """Last business day strictly before day."""
    index = HolidayIndex.coerce(holidays)
    current = day - ONE_DAY
    while not is_business_day(current, index):
        current -= ONE_DAY
    return current


def adjust_date_to_business_day(
    day: date,
    holidays: Holidays,
    direction: AdjustDirection = AdjustDirection.NEAREST,
) -> date:
    """Move day onto a business day, leaving business days untouched.

    Args:
        day: Candidate day
        holidays: Active holiday set
        direction: FORWARD takes the next business day, BACKWARD the previous
            one, NEAREST whichever is fewer calendar days away (ties go forward)
    """
    index = HolidayIndex.coerce(holidays)
    if is_business_day(day, index):
        return day

    if direction == AdjustDirection.FORWARD:
        return get_next_business_day(day, index)
    if direction == AdjustDirection.BACKWARD:
        return get_previous_business_day(day, index)

    following = get_next_business_day(day, index)
    preceding = get_previous_business_day(day, index)
    if (following - day) <= (day - preceding):
        return following
    return preceding


def get_business_days_in_range(start: date, end: date, holidays: Holidays) -> list[date]:
    """All business days in [start, end], ascending.

    The length always equals count_business_days(start, end, holidays).
    """
    if start > end:
        return []

    index = HolidayIndex.coerce(holidays)
    days: list[date] = []
    current = start
    while current <= end:
        if is_business_day(current, index):
            days.append(current)
        current += ONE_DAY
    return days


def compute_end_date(start: date, business_day_count: int, holidays: Holidays) -> date:
    """End date for a timeline of business_day_count days beginning at start.

    This is the "duration in business days" entry mode: a 1-day timeline ends
    on its start date.

    Raises:
        InvalidArgumentError: If business_day_count is less than 1
    """
    if business_day_count < 1:
        raise InvalidArgumentError(
            f"A timeline spans at least one business day, got {business_day_count}"
        )
    return add_business_days(start, business_day_count - 1, holidays)
