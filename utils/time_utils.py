"""
Time helpers.

PyMongo hands back stored dates as naive UTC datetimes, so everything in the
application compares naive UTC values.
"""
from datetime import datetime, timezone


def utcnow():
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value):
    """
    Parse an ISO-8601 date or datetime into a naive UTC datetime.

    Args:
        value (str | datetime | None): Value from a request or document

    Returns:
        datetime | None: Parsed datetime, or None for empty input

    Raises:
        ValueError: If the string cannot be parsed
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_datetime(value):
    """ISO string for a datetime, or None."""
    return value.isoformat() if value is not None else None
