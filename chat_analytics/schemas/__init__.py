from .stats import (
    Shift,
    Counters,
    DailyStat,
    DateRange,
    AggregateSummary,
    AppliedRange,
)
from .analytics import AnalyticsDocument, PageStat, CategoryStat, PageShiftPerformance, Commenter
from .user import WatchlistEntry, WatchlistAdd, CommenterRow

__all__ = [
    "Shift",
    "Counters",
    "DailyStat",
    "DateRange",
    "AggregateSummary",
    "AppliedRange",
    "AnalyticsDocument",
    "PageStat",
    "CategoryStat",
    "PageShiftPerformance",
    "Commenter",
    "WatchlistEntry",
    "WatchlistAdd",
    "CommenterRow",
]
