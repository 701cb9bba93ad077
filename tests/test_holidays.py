"""Tests for the holiday index."""

from datetime import date

from plancal.holidays import HolidayIndex
from plancal.models import Holiday


class TestHolidayIndex:
    """Tests for HolidayIndex lookups and versioning."""

    def test_lookup_by_date(self) -> None:
        index = HolidayIndex([Holiday(date=date(2025, 1, 1), name="New Year")])
        holiday = index.get(date(2025, 1, 1))
        assert holiday is not None
        assert holiday.name == "New Year"
        assert index.get(date(2025, 1, 2)) is None
        assert date(2025, 1, 1) in index

    def test_first_duplicate_wins(self) -> None:
        index = HolidayIndex(
            [
                Holiday(date=date(2025, 1, 1), name="First"),
                Holiday(date=date(2025, 1, 1), name="Second"),
            ]
        )
        assert len(index) == 1
        holiday = index.get(date(2025, 1, 1))
        assert holiday is not None
        assert holiday.name == "First"

    def test_iterates_in_date_order(self) -> None:
        index = HolidayIndex([date(2025, 5, 1), date(2025, 1, 1), date(2025, 3, 24)])
        assert [h.date for h in index] == [date(2025, 1, 1), date(2025, 3, 24), date(2025, 5, 1)]

    def test_range_and_year_queries(self) -> None:
        index = HolidayIndex([date(2024, 12, 25), date(2025, 1, 1), date(2025, 5, 1)])
        assert [h.date for h in index.in_range(date(2024, 12, 1), date(2025, 1, 31))] == [
            date(2024, 12, 25),
            date(2025, 1, 1),
        ]
        assert [h.date for h in index.for_year(2025)] == [date(2025, 1, 1), date(2025, 5, 1)]
        assert index.in_range(date(2025, 2, 1), date(2025, 1, 1)) == []

    def test_version_depends_on_content_only(self) -> None:
        a = HolidayIndex([Holiday(date=date(2025, 1, 1), name="NY", id="a")])
        b = HolidayIndex([Holiday(date=date(2025, 1, 1), name="NY", id="b")])
        c = HolidayIndex([Holiday(date=date(2025, 1, 1), name="Renamed")])
        assert a.version == b.version
        assert a.version != c.version
        assert HolidayIndex().version != a.version

    def test_coerce_reuses_index(self) -> None:
        index = HolidayIndex([date(2025, 1, 1)])
        assert HolidayIndex.coerce(index) is index
        assert HolidayIndex.coerce(None).version == HolidayIndex().version
