"""Date utilities for budgeting.

Pure functions for date parsing and month period calculations.
"""

import re
from datetime import date, datetime, timedelta

from budgeting.errors import InvalidMonthError, InvalidYearError

DATE_FORMAT = "%Y-%m-%d"
MIN_YEAR = 1900
MAX_YEAR = 2100

# strptime alone accepts "2026-1-5"; dates must be zero padded
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_date(text: str) -> date:
    """Parse a strict YYYY-MM-DD calendar date.

    Raises:
        ValueError: If the text is not a real date in that exact format.
    """
    if not _ISO_DATE_RE.fullmatch(text):
        raise ValueError(f"Invalid date format (use YYYY-MM-DD): {text!r}")
    return datetime.strptime(text, DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Render a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def check_period(month: int, year: int) -> None:
    """Reject months outside 1..12 and years outside MIN_YEAR..MAX_YEAR."""
    if not 1 <= month <= 12:
        raise InvalidMonthError(month)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidYearError(year, MIN_YEAR, MAX_YEAR)


def period_bounds(month: int, year: int) -> tuple[datetime, datetime]:
    """Calculate the inclusive datetime range covering a month.

    Args:
        month: Month number (1-12).
        year: Four digit year.

    Returns:
        Tuple of (start, end) where start is midnight on the first day and
        end is one second before the next month begins.

    Raises:
        InvalidMonthError: If month is outside 1..12.
        InvalidYearError: If year is outside MIN_YEAR..MAX_YEAR.
    """
    check_period(month, year)

    start = datetime(year, month, 1)
    next_month = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
    end = next_month - timedelta(seconds=1)
    return start, end


def format_month_label(month: int, year: int) -> str:
    """Human-readable month, e.g. "January 2026"."""
    check_period(month, year)
    return datetime(year, month, 1).strftime("%B %Y")
