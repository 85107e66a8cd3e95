from .analytics import load_document, get_document
from .pipeline import filter_by_range, aggregate, merge_summaries, rollup_by_shift, rollup_by_category, preset_range
from .watchlist import WatchlistStore, get_watchlist_store, init_watchlist_store

__all__ = [
    "load_document",
    "get_document",
    "filter_by_range",
    "aggregate",
    "merge_summaries",
    "rollup_by_shift",
    "rollup_by_category",
    "preset_range",
    "WatchlistStore",
    "get_watchlist_store",
    "init_watchlist_store",
]
