"""
Time-related utilities for the application.

All timestamps are generated in UTC. Record timestamps use the
millisecond-precision ``YYYY-MM-DDTHH:MM:SS.mmmZ`` form already present
in stored photo records; the primary key is derived from the same
millisecond value so the two never disagree.
"""

import time
from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], int]


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def now_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def iso_from_millis(millis: int) -> str:
    """Format Unix milliseconds as a UTC ISO-8601 string.

    Example:
        1704103200000 -> 2024-01-01T10:00:00.000Z
    """
    moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis % 1000:03d}Z"
