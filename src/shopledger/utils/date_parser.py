"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15 Jan 2024") and the relative
    words "today", "yesterday" and "N days ago".

    Args:
        date_str: Date string
        today: Reference day for relative dates (defaults to the current date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    parts = text.split()
    if len(parts) == 3 and parts[1:] == ["days", "ago"] and parts[0].isdigit():
        return today - timedelta(days=int(parts[0]))

    try:
        return date_parser.parse(text, dayfirst=False).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
