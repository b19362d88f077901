"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Any, Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Template notation -> strptime format
TEMPLATE_FORMATS = {
    "DD/MM/YYYY": "%d/%m/%Y",
    "DD-MM-YYYY": "%d-%m-%Y",
    "DD.MM.YYYY": "%d.%m.%Y",
    "DD/MM/YY": "%d/%m/%y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "YYYY/MM/DD": "%Y/%m/%d",
    "MM/DD/YYYY": "%m/%d/%Y",
}

# Orderings tried when the template format does not match
FALLBACK_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%d/%m/%y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
)

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_date(date_str: str) -> date:
    """Parse a user-entered date string into a date object.

    Supports absolute dates ("2024-01-15", "15/01/2024") and relative dates
    ("today", "yesterday", "last month", "this week", ...).

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
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

    parsed = parse_statement_date(date_str)
    if parsed is None:
        raise ValueError(f"Could not parse date '{date_str}'")
    return parsed


def parse_statement_date(value: Any, date_format: Optional[str] = None) -> Optional[date]:
    """Parse a date cell from a bank statement.

    The template's ``date_format`` is tried first, then day/month/year and
    year/month/day orderings, then a day-first dateutil parse that must
    find the day, month and year in the text.

    Args:
        value: String, date or datetime read from the source file
        date_format: Template notation such as "DD/MM/YYYY"

    Returns:
        Date object, or None if the value is empty or unparseable
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    formats = list(FALLBACK_FORMATS)
    if date_format and date_format.upper() in TEMPLATE_FORMATS:
        formats.insert(0, TEMPLATE_FORMATS[date_format.upper()])

    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    # dateutil fills missing parts from ``default``; a complete date parses
    # the same under two different defaults.
    try:
        first = date_parser.parse(text, dayfirst=True, default=_DEFAULT_A).date()
        second = date_parser.parse(text, dayfirst=True, default=_DEFAULT_B).date()
    except (ValueError, OverflowError, TypeError):
        return None
    return first if first == second else None
