"""
General utility functions for jobsync.

Contains helper functions used across different modules.
"""

from datetime import datetime, timezone
from itertools import islice
from typing import Iterable, Iterator, List, Optional, TypeVar
from zoneinfo import ZoneInfo

T = TypeVar("T")


def chunked(items: Iterable[T], size: int) -> Iterator[List[T]]:
    """
    Split an iterable into consecutive lists of at most ``size`` items.

    Example:
        >>> list(chunked(range(5), 2))
        [[0, 1], [2, 3], [4]]
    """
    if size < 1:
        raise ValueError("size must be a positive integer")
    iterator = iter(items)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """
    UTC ISO-8601 timestamp with millisecond precision and a ``Z`` suffix.

    Example:
        >>> iso_timestamp(datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc))
        '2024-01-02T15:04:05.000Z'
    """
    moment = (moment or utc_now()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def locale_timestamp(moment: Optional[datetime] = None, tz_name: str = "America/Chicago") -> str:
    """
    Human-readable US-style timestamp in the given timezone.

    Example:
        >>> locale_timestamp(datetime(2024, 1, 2, 21, 4, 5, tzinfo=timezone.utc))
        '1/2/2024, 3:04:05 PM'
    """
    local = (moment or utc_now()).astimezone(ZoneInfo(tz_name))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local:%M:%S} {meridiem}"
