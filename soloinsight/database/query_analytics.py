#!/usr/bin/env python3
"""
query_analytics.py
------------------
Derived statistics over the entry list.

Every function is pure and recomputed on each call; nothing is cached.
Empty inputs always produce a defined zero value (0, 0.0 or an empty list)
rather than raising or returning NaN.

Conventions:
    - Day difference: whole elapsed days, truncated (see utils.dates.day_diff)
    - Calendar questions (day, month, hour) use local time
    - Rounding is half-up (27.5 -> 28), display averages keep 1 decimal

Usage:
    from soloinsight.database.query_analytics import dashboard_stats
    stats = dashboard_stats(entries, now=now_ms())

    analytics = QueryAnalytics(logger)
    analytics.get_dashboard(entries)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

# --- Local imports ---
from soloinsight.core.logging_manager import InsightLogger
from soloinsight.dataclasses.entry import Entry
from soloinsight.database.models.enums import Outcome
from soloinsight.utils.dates import (
    MS_PER_DAY,
    TimeLike,
    day_diff,
    local_date,
    round_half_up,
    to_local,
    to_ms,
)
from .decorators import log_database_operation

ROLLING_SHORT = 30
ROLLING_LONG = 90
RECENT_LIMIT = 20
TAG_RANKING_LIMIT = 5
STREAK_BREAK_DAYS = 2
MIN_INTERVAL_DAYS = 0.5
TIME_OF_DAY_BUCKETS = 12


@dataclass
class DayBucket:
    """One calendar day of the recent-activity series."""

    day: date
    label: str
    count: int
    intensity: float


@dataclass
class MonthStats:
    """Aggregates for one calendar month."""

    entries: List[Entry] = field(default_factory=list)
    total_sessions: int = 0
    total_duration: int = 0
    avg_intensity: float = 0.0


@dataclass
class TagStat:
    """Usage of one tag across entries."""

    tag: str
    count: int
    avg_intensity: float


def _mean(values: Sequence[float]) -> float:
    return sum(values) / (len(values) or 1)


def _percent(part: int, whole: int) -> int:
    return int(round_half_up(part / (whole or 1) * 100))


# -------------------------------------------------------------------------
# Rolling windows
# -------------------------------------------------------------------------


def rolling_window(entries: Sequence[Entry], days: int, now: TimeLike = None) -> List[Entry]:
    """Entries no more than `days` whole days before now."""
    now = to_ms(now)
    return [e for e in entries if day_diff(now, e.timestamp) <= days]


def rolling_count(entries: Sequence[Entry], days: int, now: TimeLike = None) -> int:
    return len(rolling_window(entries, days, now))


def rolling_average(
    entries: Sequence[Entry], field_name: str, days: int = ROLLING_SHORT, now: TimeLike = None
) -> float:
    """
    Mean of 'duration' or 'intensity' over the rolling window.

    An empty window averages to 0.

    Raises:
        ValueError: For any other field name
    """
    if field_name not in ("duration", "intensity"):
        raise ValueError(f"Cannot average field {field_name!r}")
    window = rolling_window(entries, days, now)
    return _mean([getattr(e, field_name) for e in window])


def outcome_rate(
    entries: Sequence[Entry], days: int = ROLLING_SHORT, now: TimeLike = None
) -> int:
    """Rounded percentage of window entries with outcome YES."""
    window = rolling_window(entries, days, now)
    return _percent(sum(1 for e in window if e.outcome == Outcome.YES), len(window))


def max_gap_days(entries: Sequence[Entry]) -> int:
    """Largest whole-day gap between chronologically adjacent entries."""
    ordered = sorted(entries, key=lambda e: e.timestamp, reverse=True)
    gaps = [
        day_diff(newer.timestamp, older.timestamp)
        for newer, older in zip(ordered, ordered[1:])
    ]
    return max(gaps, default=0)


# -------------------------------------------------------------------------
# Calendar buckets
# -------------------------------------------------------------------------


def _entries_on(entries: Sequence[Entry], day: date) -> List[Entry]:
    return [e for e in entries if local_date(e.timestamp) == day]


def daily_series(
    entries: Sequence[Entry], days: int = 7, now: TimeLike = None
) -> List[DayBucket]:
    """
    Count and mean intensity for each of the last `days` calendar days.

    Oldest first; today is the last bucket.
    """
    today = local_date(to_ms(now))
    series: List[DayBucket] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_entries = _entries_on(entries, day)
        intensity = _mean([e.intensity for e in day_entries]) if day_entries else 0.0
        series.append(
            DayBucket(day=day, label=day.strftime("%a"), count=len(day_entries), intensity=intensity)
        )
    return series


def _reference_date(reference: Any) -> date:
    if isinstance(reference, datetime):
        return reference.date()
    if isinstance(reference, date):
        return reference
    return local_date(to_ms(reference))


def _same_month(day: date, ref: date) -> bool:
    return (day.year, day.month) == (ref.year, ref.month)


def monthly_stats(entries: Sequence[Entry], reference: Any = None) -> MonthStats:
    """
    Aggregates for the calendar month containing `reference`.

    Args:
        entries: All entries
        reference: date, datetime or epoch ms inside the month (default: now)
    """
    ref = _reference_date(reference)
    month_entries = sorted(
        (e for e in entries if _same_month(local_date(e.timestamp), ref)),
        key=lambda e: e.timestamp,
        reverse=True,
    )
    total = len(month_entries)
    return MonthStats(
        entries=month_entries,
        total_sessions=total,
        total_duration=sum(e.duration for e in month_entries),
        avg_intensity=(
            round_half_up(_mean([e.intensity for e in month_entries]), 1) if total else 0.0
        ),
    )


def time_of_day_distribution(entries: Sequence[Entry]) -> List[int]:
    """Entry counts per two-hour window of the local day (index 0 = 00:00-01:59)."""
    buckets = [0] * TIME_OF_DAY_BUCKETS
    for entry in entries:
        buckets[to_local(entry.timestamp).hour // 2] += 1
    return buckets


def heatmap_level(day_entries: Sequence[Entry]) -> int:
    """
    Heatmap level 0-4 for one day's entries.

    Examples:
        >>> heatmap_level([])
        0
    """
    if not day_entries:
        return 0
    count = len(day_entries)
    avg = _mean([e.intensity for e in day_entries])
    if count > 2 or avg > 4:
        return 4
    if count > 1 or avg > 3:
        return 3
    if avg > 2:
        return 2
    return 1


def month_heatmap(entries: Sequence[Entry], reference: Any = None) -> Dict[date, int]:
    """Heatmap level for every day of the month containing `reference`."""
    ref = _reference_date(reference)
    by_day: Dict[date, List[Entry]] = {}
    for entry in entries:
        by_day.setdefault(local_date(entry.timestamp), []).append(entry)

    days_in_month = calendar.monthrange(ref.year, ref.month)[1]
    return {
        day: heatmap_level(by_day.get(day, []))
        for day in (date(ref.year, ref.month, n) for n in range(1, days_in_month + 1))
    }


# -------------------------------------------------------------------------
# Long-run patterns
# -------------------------------------------------------------------------


def tag_ranking(entries: Sequence[Entry], limit: int = TAG_RANKING_LIMIT) -> List[TagStat]:
    """
    Tags ranked by mean intensity of the entries carrying them.

    Ties keep first-seen order.
    """
    intensities: Dict[str, List[int]] = {}
    for entry in entries:
        for tag in entry.tags:
            intensities.setdefault(tag, []).append(entry.intensity)

    stats = [
        TagStat(tag=tag, count=len(values), avg_intensity=_mean(values))
        for tag, values in intensities.items()
    ]
    stats.sort(key=lambda s: s.avg_intensity, reverse=True)
    return stats[:limit]


def longest_streak(entries: Sequence[Entry]) -> int:
    """
    Longest run of sessions each less than two days after the previous one.

    Counted in sessions, not calendar days.
    """
    if not entries:
        return 0
    ordered = sorted(entries, key=lambda e: e.timestamp)
    best = current = 1
    for earlier, later in zip(ordered, ordered[1:]):
        if (later.timestamp - earlier.timestamp) / MS_PER_DAY < STREAK_BREAK_DAYS:
            current += 1
        else:
            current = 1
        best = max(best, current)
    return best


def average_interval_days(entries: Sequence[Entry]) -> float:
    """Mean gap in days between sessions, ignoring same-day gaps under half a day."""
    ordered = sorted(entries, key=lambda e: e.timestamp)
    gaps = [
        (later.timestamp - earlier.timestamp) / MS_PER_DAY
        for earlier, later in zip(ordered, ordered[1:])
    ]
    counted = [gap for gap in gaps if gap >= MIN_INTERVAL_DAYS]
    return _mean(counted) if counted else 0.0


def edging_rate(entries: Sequence[Entry]) -> int:
    """Rounded percentage of all entries with outcome EDGING."""
    return _percent(sum(1 for e in entries if e.outcome == Outcome.EDGING), len(entries))


# -------------------------------------------------------------------------
# Views
# -------------------------------------------------------------------------


def dashboard_stats(entries: Sequence[Entry], now: TimeLike = None) -> Dict[str, Any]:
    """
    Headline numbers for the dashboard.

    Keys: count30, count90, avgDuration (rounded), avgIntensity (1 decimal),
    outcomeRate (percent), maxInterval (days).
    """
    now = to_ms(now)
    return {
        "count30": rolling_count(entries, ROLLING_SHORT, now),
        "count90": rolling_count(entries, ROLLING_LONG, now),
        "avgDuration": int(round_half_up(rolling_average(entries, "duration", ROLLING_SHORT, now))),
        "avgIntensity": round_half_up(rolling_average(entries, "intensity", ROLLING_SHORT, now), 1),
        "outcomeRate": outcome_rate(entries, ROLLING_SHORT, now),
        "maxInterval": max_gap_days(entries),
    }


def deep_insights(entries: Sequence[Entry], now: TimeLike = None) -> Dict[str, Any]:
    """
    All-time pattern view.

    Keys: count, avgDuration, avgIntensity, recent (last 20 sessions,
    oldest first, as {date 'MM/DD', duration, intensity}), timeOfDay,
    topTags, longestStreak, avgInterval, edgingRate.
    """
    recent = sorted(entries, key=lambda e: e.timestamp)[-RECENT_LIMIT:]
    return {
        "count": len(entries),
        "avgDuration": int(round_half_up(_mean([e.duration for e in entries]))),
        "avgIntensity": round_half_up(_mean([e.intensity for e in entries]), 1),
        "recent": [
            {
                "date": to_local(e.timestamp).strftime("%m/%d"),
                "duration": e.duration,
                "intensity": e.intensity,
            }
            for e in recent
        ],
        "timeOfDay": time_of_day_distribution(entries),
        "topTags": tag_ranking(entries),
        "longestStreak": longest_streak(entries),
        "avgInterval": round_half_up(average_interval_days(entries), 1),
        "edgingRate": edging_rate(entries),
    }


class QueryAnalytics:
    """
    Logged access to the statistics functions.

    Used by the facade so every statistics request shows up in the
    operations log.
    """

    def __init__(self, logger: Optional[InsightLogger] = None) -> None:
        self.logger = logger

    @log_database_operation("get_dashboard_stats")
    def get_dashboard(self, entries: Sequence[Entry], now: TimeLike = None) -> Dict[str, Any]:
        return dashboard_stats(entries, now)

    @log_database_operation("get_daily_series")
    def get_daily_series(
        self, entries: Sequence[Entry], days: int = 7, now: TimeLike = None
    ) -> List[DayBucket]:
        return daily_series(entries, days, now)

    @log_database_operation("get_monthly_stats")
    def get_monthly(self, entries: Sequence[Entry], reference: Any = None) -> MonthStats:
        return monthly_stats(entries, reference)

    @log_database_operation("get_deep_insights")
    def get_insights(self, entries: Sequence[Entry], now: TimeLike = None) -> Dict[str, Any]:
        return deep_insights(entries, now)

    @log_database_operation("get_month_heatmap")
    def get_heatmap(self, entries: Sequence[Entry], reference: Any = None) -> Dict[date, int]:
        return month_heatmap(entries, reference)
