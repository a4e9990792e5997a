"""
BumpBoard Formatting Utilities

Helper functions for formatting output.
"""

from datetime import datetime, timezone


def format_iso(timestamp: float) -> str:
    """
    Format Unix timestamp as an ISO-8601 UTC string for the JSON API.

    Args:
        timestamp: Unix timestamp (seconds)

    Returns:
        Formatted string like "2022-11-20T16:00:00.000Z"
    """
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def format_timestamp(timestamp: float) -> str:
    """
    Format Unix timestamp for page display.

    Args:
        timestamp: Unix timestamp (seconds)

    Returns:
        Formatted string like "2022-11-20 16:00"
    """
    if not timestamp:
        return "Never"

    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M")

