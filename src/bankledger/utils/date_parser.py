"""Date parsing and formatting utilities.

Dates are handled as ``datetime.date`` internally and rendered as fixed-width
``YYYY-MM-DD`` strings at every boundary, so string comparison of the rendered
form agrees with date ordering.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_FORMAT = "%Y-%m-%d"
_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_date(value) -> str:
    """Canonicalize a date-like value to ``YYYY-MM-DD``.

    Accepts date, datetime or string input. Invalid or empty input yields an
    empty string; this never raises.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().strftime(ISO_FORMAT)
    if isinstance(value, date):
        return value.strftime(ISO_FORMAT)
    text = str(value).strip()
    if not text:
        return ""
    try:
        return date.fromisoformat(text[:10]).strftime(ISO_FORMAT)
    except ValueError:
        pass
    try:
        return date_parser.parse(text).date().strftime(ISO_FORMAT)
    except (ValueError, OverflowError):
        return ""


def parse_iso_date(value) -> date:
    """Strictly parse a ``YYYY-MM-DD`` string; a date is returned unchanged.

    Raises:
        ValueError: If the value is not exactly a valid ``YYYY-MM-DD`` date
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date {value!r}. Expected YYYY-MM-DD")
    return date.fromisoformat(value)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to the real current date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, this-week, last-month, last-year, last-week)
        today: Reference day (defaults to the real current date)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if today is None:
        today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        # Day before the first day of the current month
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        end_date = start_date + timedelta(days=6)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "this-week, last-month, last-year, last-week"
        )
