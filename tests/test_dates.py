"""Tests for date and month string parsing."""

from datetime import date

import pytest

from plancal.dates import parse_day, parse_month


class TestParseMonth:
    def test_year_month(self) -> None:
        assert parse_month("2025-01") == date(2025, 1, 1)

    def test_full_date_uses_its_month(self) -> None:
        assert parse_month(" 2025-02-17 ") == date(2025, 2, 1)

    @pytest.mark.parametrize("value", ["2025-00", "2025-13", "Jan 2025", "2025"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError, match="Invalid"):
            parse_month(value)


class TestParseDay:
    def test_iso_date(self) -> None:
        assert parse_day("2025-01-06") == date(2025, 1, 6)

    @pytest.mark.parametrize("value", ["2025-1-6", "20250106", "2025-02-30"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError, match="Invalid date"):
            parse_day(value)
