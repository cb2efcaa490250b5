"""
Timestamp conversion utilities for Windows artifacts.

Formats supported:
- FILETIME: 100-nanosecond intervals since 1601-01-01 (registry, Shell Link)
- WebKit: microseconds since 1601-01-01 (Edge Bookmarks)
- Durations stored as millisecond counters (UserAssist focus time)
"""

from __future__ import annotations

import struct
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

# Windows FILETIME epoch: January 1, 1601 UTC
FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)
# Difference between the FILETIME and Unix epochs in 100-nanosecond intervals
EPOCH_AS_FILETIME = 116444736000000000
HUNDREDS_OF_NS = 10_000_000


def filetime_to_datetime(filetime: Union[int, bytes]) -> Optional[datetime]:
    """
    Convert Windows FILETIME to datetime.

    Zero is a valid input and yields the epoch itself (1601-01-01); callers
    that treat it as "never" must apply their own guard.

    Args:
        filetime: Either an integer FILETIME value or 8 bytes (little-endian)

    Returns:
        datetime in UTC, or None if the value is negative, malformed or beyond
        the range datetime can represent
    """
    if isinstance(filetime, (bytes, bytearray, memoryview)):
        if len(filetime) != 8:
            return None
        filetime = struct.unpack("<q", bytes(filetime))[0]

    if filetime < 0:
        return None

    try:
        # Integer microseconds keep the conversion exact for every platform
        return FILETIME_EPOCH + timedelta(microseconds=filetime // 10)
    except OverflowError:
        return None


def webkit_to_datetime(microseconds: int) -> Optional[datetime]:
    """
    Convert WebKit timestamp to datetime.

    WebKit timestamps are microseconds since 1601-01-01 00:00:00 UTC.
    Used by Chromium-based browsers (Chrome, Edge).

    Returns:
        datetime in UTC, or None if zero, negative or out of range
    """
    if not microseconds or microseconds <= 0:
        return None
    try:
        return FILETIME_EPOCH + timedelta(microseconds=microseconds)
    except OverflowError:
        return None


def datetime_to_filetime(dt: datetime) -> int:
    """
    Convert a datetime to a Windows FILETIME integer.

    Naive datetimes are treated as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt.astimezone(timezone.utc) - FILETIME_EPOCH
    return (delta.days * 86400 + delta.seconds) * HUNDREDS_OF_NS + delta.microseconds * 10


def format_datetime(dt: Optional[datetime], fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Format datetime to string.

    Args:
        dt: datetime object or None
        fmt: strftime format string

    Returns:
        Formatted string or empty string if dt is None
    """
    if dt is None:
        return ""
    return dt.strftime(fmt)


def format_duration(duration: Union[int, float, timedelta]) -> str:
    """
    Format a duration to a human-readable string.

    Args:
        duration: Duration in seconds or as timedelta

    Returns:
        Human-readable duration string

    Example:
        >>> format_duration(90061)
        '1d 1h 1m 1s'
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = duration

    if seconds < 0:
        return "0s"

    days, remainder = divmod(int(seconds), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return " ".join(parts)


def utc_now() -> str:
    """Current UTC time as ISO 8601 string without microseconds."""
    return datetime.now(tz=timezone.utc).replace(microsecond=0).isoformat()
