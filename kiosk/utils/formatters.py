"""Formatting helpers for API output."""
from datetime import datetime, timezone


def format_timestamp(value: datetime) -> str:
    """
    Render a timestamp as ISO-8601 UTC without a zone designator.

    Naive values are assumed to already be UTC (SQLite returns them that way).

    Examples:
        format_timestamp(datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc))
            -> "2024-05-01T12:30:00.000"
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec='milliseconds')
