"""Calendar date helpers.

Contract and closing dates are plain calendar dates. They are parsed from the
leading ``YYYY-MM-DD`` part of whatever the record store hands back and are
never converted through a UTC offset, so a deadline never drifts by a day
depending on where it is rendered.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional


def parse_calendar_date(value: Any) -> Optional[date]:
    """Parse a value into a naive ``date``, or ``None`` if it isn't one."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    # Timestamps: only the calendar part counts
    if "T" in text:
        text = text.split("T")[0]
    elif " " in text:
        text = text.split(" ")[0]
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def add_days(anchor: date, days: int) -> date:
    return anchor + timedelta(days=days)


def day_of_year(value: date) -> int:
    """1-indexed ordinal day of ``value`` within its own calendar year."""
    return value.timetuple().tm_yday


def format_long(value: Optional[date]) -> str:
    """Render as e.g. ``January 17, 2025``."""
    if value is None:
        return ""
    return f"{value.strftime('%B')} {value.day}, {value.year}"
