"""Date and month string parsing for the command line and plan files."""

import re
from datetime import date

MONTHS_PER_YEAR = 12


def parse_month(month_str: str) -> date:
    """Parse a month string to the first day of that month.

    Supported formats:
    - "2025-01" - Year and month
    - "2025-01-17" - Any day; the month containing it is used

    Raises:
        ValueError: If the string is not a recognizable month
    """
    month_str = month_str.strip()

    month_match = re.match(r"^(\d{4})-(\d{2})$", month_str)
    if month_match:
        year = int(month_match.group(1))
        month = int(month_match.group(2))
        if month < 1 or month > MONTHS_PER_YEAR:
            raise ValueError(f"Invalid month '{month_str}': month must be 01-12")
        return date(year, month, 1)

    return parse_day(month_str).replace(day=1)


def parse_day(day_str: str) -> date:
    """Parse an ISO calendar day (YYYY-MM-DD).

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    day_str = day_str.strip()
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", day_str):
        raise ValueError(f"Invalid date '{day_str}': expected YYYY-MM-DD")
    try:
        return date.fromisoformat(day_str)
    except ValueError as e:
        raise ValueError(f"Invalid date '{day_str}': {e}") from e
