"""UTC date and datetime utilities."""

import re
from datetime import date, datetime, timezone

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This function should be used instead of datetime.now() or datetime.utcnow()
    to ensure all timestamps are timezone-aware and stored in UTC.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Return the current calendar date in UTC."""
    return utc_now().date()


def parse_iso_date(value: str | date) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Args:
        value: Date string (or an already-parsed date, returned unchanged)

    Returns:
        The parsed date

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date

    Example:
        >>> parse_iso_date("2024-01-10")
        datetime.date(2024, 1, 10)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not ISO_DATE.match(text):
        raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
    return date.fromisoformat(text)


def to_epoch_ms(moment: datetime) -> int:
    """Convert an aware datetime to integer milliseconds since the epoch."""
    return int(moment.timestamp() * 1000)


def from_epoch_ms(value: int | float) -> datetime:
    """Convert milliseconds since the epoch to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
