"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_OFFSETS = {"last": -1, "this": 0, "next": 1}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", ...), the
    words "today", "yesterday" and "tomorrow", and the start of a relative
    period: "last month", "this week", "next year" and so on. Weeks start on
    Monday.

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

    word, _, period = date_str.partition(" ")
    if word in _OFFSETS and period in ("week", "month", "year"):
        return period_start(today, period, _OFFSETS[word])

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def period_start(day: date, period: str, offset: int = 0) -> date:
    """Return the first day of the week, month or year containing ``day``,
    shifted by ``offset`` periods."""
    if period == "week":
        return day - timedelta(days=day.weekday()) + relativedelta(weeks=offset)
    if period == "month":
        return day.replace(day=1) + relativedelta(months=offset)
    if period == "year":
        return day.replace(month=1, day=1) + relativedelta(years=offset)
    raise ValueError(f"Unknown period: '{period}'")
