"""
Date-range filtering and aggregation shared by every view.

ISO day strings (YYYY-MM-DD) sort the same way as the days they name, so
range checks compare strings directly and never parse dates or timezones.
All functions here are pure.
"""

import math
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..schemas.analytics import CategoryStat
from ..schemas.stats import (
    AggregateSummary,
    Counters,
    DailyCategoryStats,
    DailyShiftStats,
    DailyStat,
    DateRange,
    Shift,
)

logger = logging.getLogger(__name__)

COUNTER_FIELDS = (
    "messages",
    "incoming",
    "outgoing",
    "comments",
    "hidden",
    "replies",
    "with_replies",
    "sessions",
)

ROLLUP_FIELDS = ("messages", "incoming", "outgoing")

# Preset name -> days back from the anchor day (None: whole data range)
PRESETS = {
    "today": 0,
    "last_7_days": 7,
    "last_30_days": 30,
    "all_time": None,
}


def is_bounded(start: Optional[str], end: Optional[str]) -> bool:
    """A range only filters when both bounds are given."""
    return bool(start) and bool(end)


def in_range(day: str, start: str, end: str) -> bool:
    return start <= day <= end


def filter_by_range(
    series: Sequence[DailyStat],
    start: Optional[str],
    end: Optional[str],
) -> Sequence[DailyStat]:
    """Keep the days in [start, end], inclusive.

    Returns ``series`` itself when either bound is empty. A reversed range
    selects nothing.
    """
    if not is_bounded(start, end):
        return series
    return [day for day in series if in_range(day.date, start, end)]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _weighted_average(total: float, weight: int) -> Optional[int]:
    if weight > 0:
        return round_half_up(total / weight)
    return None


def aggregate(series: Iterable[DailyStat]) -> AggregateSummary:
    """Reduce daily records to one summary.

    Counters are summed. The average response time is weighted by each
    day's session count, and days without a recorded response time add
    nothing to either the weighted sum or the weight.
    """
    totals = {name: 0 for name in COUNTER_FIELDS}
    response_time_sum = 0.0
    response_time_count = 0

    for day in series:
        for name in COUNTER_FIELDS:
            totals[name] += getattr(day, name) or 0
        if day.avg_response_time is not None:
            response_time_sum += day.avg_response_time * day.sessions
            response_time_count += day.sessions

    return AggregateSummary(
        **totals,
        response_time_sum=response_time_sum,
        response_time_count=response_time_count,
        avg_response_time=_weighted_average(response_time_sum, response_time_count),
    )


def merge_summaries(a: AggregateSummary, b: AggregateSummary) -> AggregateSummary:
    """Combine the summaries of two disjoint sets of days."""
    totals = {name: getattr(a, name) + getattr(b, name) for name in COUNTER_FIELDS}
    response_time_sum = a.response_time_sum + b.response_time_sum
    response_time_count = a.response_time_count + b.response_time_count
    return AggregateSummary(
        **totals,
        response_time_sum=response_time_sum,
        response_time_count=response_time_count,
        avg_response_time=_weighted_average(response_time_sum, response_time_count),
    )


def _accumulate(target: Counters, source: Counters) -> None:
    for name in ROLLUP_FIELDS:
        setattr(target, name, getattr(target, name) + getattr(source, name))


def _dates_in_range(
    by_date: Dict[str, Dict[str, Counters]],
    start: Optional[str],
    end: Optional[str],
) -> List[str]:
    if not is_bounded(start, end):
        return list(by_date)
    return [day for day in by_date if in_range(day, start, end)]


def rollup_by_shift(
    daily_shift_stats: DailyShiftStats,
    start: Optional[str],
    end: Optional[str],
) -> Dict[Shift, Counters]:
    """Sum per-shift counters over the days in range.

    The result always holds all three shifts, in display order.
    """
    rollup = {shift: Counters() for shift in Shift}
    for day in _dates_in_range(daily_shift_stats, start, end):
        for label, counters in daily_shift_stats[day].items():
            try:
                shift = Shift(label)
            except ValueError:
                logger.debug(f"Skipping unknown shift {label!r} on {day}")
                continue
            _accumulate(rollup[shift], counters)
    return rollup


def rollup_by_category(
    daily_category_stats: DailyCategoryStats,
    start: Optional[str],
    end: Optional[str],
    category_stats: Sequence[CategoryStat] = (),
) -> Dict[str, Tuple[Counters, int]]:
    """Sum per-category counters over the days in range.

    Returns ``{category: (counters, page_count)}``. Page counts come from the
    exported category stats as-is; categories listed there are always present.
    """
    page_counts = {row.category: row.page_count for row in category_stats}
    rollup: Dict[str, Counters] = {name: Counters() for name in page_counts}

    for day in _dates_in_range(daily_category_stats, start, end):
        for category, counters in daily_category_stats[day].items():
            _accumulate(rollup.setdefault(category, Counters()), counters)

    return {
        category: (counters, page_counts.get(category, 0))
        for category, counters in rollup.items()
    }


def preset_range(
    preset: str,
    date_range: DateRange,
    today: Optional[date] = None,
) -> Tuple[Optional[str], Optional[str]]:
    """Resolve a quick filter to (start, end).

    ``last_N_days`` spans the anchor day and the N days before it. The
    anchor is the newest day in the data, or today when that is unknown.
    """
    if preset not in PRESETS:
        raise ValueError(f"Unknown preset: {preset}")

    days = PRESETS[preset]
    if days is None:
        return date_range.min_date, date_range.max_date

    if date_range.max_date:
        anchor = date.fromisoformat(date_range.max_date)
    else:
        anchor = today or date.today()
    start = anchor - timedelta(days=days)
    return start.isoformat(), anchor.isoformat()
