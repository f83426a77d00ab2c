"""
Utility functions for federated search.

Common helper functions used by the provider clients and backends.
"""

import re
from datetime import datetime

DEFAULT_TIMEOUT_SECONDS = 5.0

# Go's zero time, sent by providers that have no date for a result
ZERO_DATE = "0001-01-01T00:00:00Z"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ns|us|µs|ms|s|m|h)")


def parse_timeout(value: str | None, default: float = DEFAULT_TIMEOUT_SECONDS) -> float:
    """
    Parse a duration string such as "5000ms", "2s" or "1m30s" into seconds.

    Args:
        value: Duration string
        default: Seconds to return when the value is empty or invalid

    Returns:
        Duration in seconds
    """
    if not value:
        return default

    text = value.strip()
    position = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            return default
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if position == 0 or position != len(text) or total <= 0:
        return default
    return total


def format_duration(seconds: float) -> str:
    """Format seconds as a millisecond duration string understood by parse_timeout."""
    return f"{int(round(seconds * 1000))}ms"


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp, treating the zero date and garbage as missing.

    Args:
        value: Timestamp string from a provider payload

    Returns:
        Parsed datetime or None
    """
    if not value or value == ZERO_DATE:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None


def truncate(text: str, limit: int = 255) -> str:
    """Truncate text to the given length, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
