"""
Time Utilities

Quote records are stamped with timezone-aware UTC datetimes. These helpers
provide the current time, the "never updated" sentinel and age arithmetic
used by the refresh cadence rules.
"""

from datetime import datetime, timezone
from typing import Optional


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
"""Timestamp carried by records that were never refreshed."""


def current_utc_datetime() -> datetime:
    """
    Get current UTC datetime.

    Returns:
        datetime: Current time as timezone-aware datetime in UTC

    Example:
        >>> current_utc_datetime()
        datetime.datetime(2024, 1, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Return *dt* as an aware UTC datetime.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def seconds_since(then: datetime, now: Optional[datetime] = None) -> float:
    """
    Seconds elapsed between *then* and *now* (defaults to the current time).

    Examples:
        >>> seconds_since(EPOCH, datetime(1970, 1, 1, 0, 10, tzinfo=timezone.utc))
        600.0
    """
    now = ensure_utc(now) if now is not None else current_utc_datetime()
    return (now - ensure_utc(then)).total_seconds()
