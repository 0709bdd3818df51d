"""Epoch-millisecond timestamp helpers."""

import time
from datetime import datetime, timezone


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def to_iso_string(timestamp_ms: int) -> str:
    """Format epoch milliseconds as an ISO 8601 UTC string.

    Args:
        timestamp_ms: Epoch milliseconds.

    Returns:
        String like "2024-01-15T12:00:00.000Z".
    """
    seconds, millis = divmod(timestamp_ms, 1000)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def parse_iso_date(value: str | None) -> int | None:
    """Parse an ISO 8601 date or datetime string to epoch milliseconds.

    Date-only and naive values are interpreted as UTC.

    Args:
        value: String such as "2024-01-16" or "2024-01-16T15:00:00Z".

    Returns:
        Epoch milliseconds, or None if the value cannot be parsed.
    """
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)
