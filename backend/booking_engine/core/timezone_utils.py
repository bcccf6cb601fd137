"""
Time helpers for the booking engine.

All lifecycle timestamps are stored as timezone-aware UTC datetimes. Hotel
stay dates are calendar dates without a timezone.
"""

from datetime import date, datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today(clock: Clock = utc_now) -> date:
    """Today's calendar date in UTC according to ``clock``."""
    return clock().astimezone(timezone.utc).date()
