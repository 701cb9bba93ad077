"""Holiday lookup index."""

from __future__ import annotations

import bisect
import hashlib
from collections.abc import Iterable, Iterator
from datetime import date

from .models import Holiday

HolidayLike = Holiday | date


class HolidayIndex:
    """Date-keyed lookup over a flat holiday list.

    The index is immutable once built. Holidays are kept sorted by date so
    range queries use binary search. When the same date is listed twice,
    the first holiday listed wins.
    """

    def __init__(self, holidays: Iterable[HolidayLike] = ()) -> None:
        by_date: dict[date, Holiday] = {}
        for item in holidays:
            holiday = item if isinstance(item, Holiday) else Holiday(date=item, name="")
            by_date.setdefault(holiday.date, holiday)

        self._by_date = by_date
        self._dates: list[date] = sorted(by_date)
        self._version = self._content_hash()

    def _content_hash(self) -> str:
        digest = hashlib.sha256()
        for day in self._dates:
            digest.update(f"{day.isoformat()}|{self._by_date[day].name}\n".encode())
        return digest.hexdigest()[:16]

    @classmethod
    def coerce(cls, holidays: HolidayIndex | Iterable[HolidayLike] | None) -> HolidayIndex:
        """Return holidays as an index, building one only if needed."""
        if isinstance(holidays, HolidayIndex):
            return holidays
        return cls(holidays or ())

    @property
    def version(self) -> str:
        """Content hash of the holiday set, stable across equal inputs."""
        return self._version

    def get(self, day: date) -> Holiday | None:
        return self._by_date.get(day)

    def is_holiday(self, day: date) -> bool:
        return day in self._by_date

    def in_range(self, start: date, end: date) -> list[Holiday]:
        """Holidays falling within [start, end], in date order."""
        if start > end:
            return []
        lo = bisect.bisect_left(self._dates, start)
        hi = bisect.bisect_right(self._dates, end)
        return [self._by_date[day] for day in self._dates[lo:hi]]

    def for_year(self, year: int) -> list[Holiday]:
        return self.in_range(date(year, 1, 1), date(year, 12, 31))

    def __contains__(self, day: object) -> bool:
        return day in self._by_date

    def __iter__(self) -> Iterator[Holiday]:
        return (self._by_date[day] for day in self._dates)

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self) -> str:
        return f"HolidayIndex({len(self)} holidays, version={self._version})"
