#!/usr/bin/env python3
"""
dates.py
--------
Timestamp helpers.

Entries store timestamps as integer milliseconds since the epoch. Calendar
questions (which day, which month, which hour) are answered in local time.
"""
from __future__ import annotations

import math
import time
from datetime import date, datetime, timezone
from typing import Optional, Union

MS_PER_DAY = 86_400_000

TimeLike = Union[int, float, datetime, None]


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def to_ms(value: TimeLike) -> int:
    """
    Normalize a timestamp-ish value to epoch milliseconds.

    Naive datetimes are taken as local time. None means now.
    """
    if value is None:
        return now_ms()
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    return int(value)


def to_local(ts: int) -> datetime:
    """Convert epoch milliseconds to a naive local datetime."""
    return datetime.fromtimestamp(ts / 1000)


def local_date(ts: int) -> date:
    """Local calendar date of an epoch-milliseconds timestamp."""
    return to_local(ts).date()


def day_diff(later: int, earlier: int) -> int:
    """
    Whole days elapsed between two timestamps, truncated toward zero.

    Examples:
        >>> day_diff(MS_PER_DAY * 3 - 1, 0)
        2
    """
    return int((later - earlier) / MS_PER_DAY)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half away from zero for positives (27.5 -> 28, 2.25 -> 2.3).

    Python's round() uses banker's rounding; display values here follow
    the conventional rule.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def iso_utc(ts: Optional[int] = None) -> str:
    """ISO-8601 UTC string for a timestamp (default: now)."""
    moment = datetime.fromtimestamp(to_ms(ts) / 1000, tz=timezone.utc)
    return moment.isoformat().replace("+00:00", "Z")
