"""Management report and page table built from the exported per-page rows."""

from typing import Dict, List, Optional, Sequence, Tuple

from ..schemas.analytics import PageShiftPerformance, PageStat
from ..schemas.report import PageTotals, ReportPage, ShiftSummary
from ..schemas.stats import SHIFT_HOURS, Shift

ALL_CATEGORIES = "all"

PAGE_SORT_FIELDS = ("messages", "sessions", "avg_response_time", "avg_duration")


def group_pages(rows: Sequence[PageShiftPerformance]) -> List[ReportPage]:
    """Group (page, shift) rows by page name, busiest page first."""
    groups: Dict[str, dict] = {}
    for row in rows:
        group = groups.setdefault(row.name, {
            "name": row.name,
            "page_id": row.page_id,
            "category": row.category,
            "shifts": {},
        })
        group["shifts"][row.shift] = row

    pages = []
    for group in groups.values():
        totals = PageTotals()
        for shift_row in group["shifts"].values():
            totals.messages += shift_row.messages or 0
            totals.incoming += shift_row.incoming or 0
            totals.outgoing += shift_row.outgoing or 0
            totals.sessions += shift_row.sessions or 0
        pages.append(ReportPage(totals=totals, **group))

    # Stable sort keeps first-seen order among ties
    pages.sort(key=lambda page: page.totals.messages, reverse=True)
    return pages


def filter_by_category(pages: Sequence[ReportPage], category: str) -> List[ReportPage]:
    if category == ALL_CATEGORIES:
        return list(pages)
    return [page for page in pages if page.category == category]


def grand_totals(pages: Sequence[ReportPage]) -> PageTotals:
    totals = PageTotals()
    for page in pages:
        totals.messages += page.totals.messages
        totals.incoming += page.totals.incoming
        totals.outgoing += page.totals.outgoing
        totals.sessions += page.totals.sessions
    return totals


def shift_summary(pages: Sequence[ReportPage]) -> List[ShiftSummary]:
    """Messages and sessions per shift across the given pages, all three shifts."""
    summary = []
    for shift in Shift:
        row = ShiftSummary(shift=shift.value, hours=SHIFT_HOURS[shift])
        for page in pages:
            shift_row = page.shifts.get(shift.value)
            if shift_row is None:
                continue
            row.messages += shift_row.messages or 0
            row.sessions += shift_row.sessions or 0
        summary.append(row)
    return summary


def report_categories(pages: Sequence[ReportPage]) -> List[str]:
    """Distinct page categories in first-seen order."""
    seen = []
    for page in pages:
        if page.category and page.category not in seen:
            seen.append(page.category)
    return seen


def sort_pages(
    pages: Sequence[PageStat],
    sort_by: str = "messages",
    descending: bool = True,
) -> List[PageStat]:
    """Sort the page table by one numeric column, treating missing as 0."""
    if sort_by not in PAGE_SORT_FIELDS:
        raise ValueError(f"Cannot sort pages by {sort_by}")
    return sorted(pages, key=lambda page: getattr(page, sort_by) or 0, reverse=descending)


def build_report(
    rows: Sequence[PageShiftPerformance],
    category: str = ALL_CATEGORIES,
) -> Tuple[List[ReportPage], List[ReportPage], List[str]]:
    """Return (all pages, pages in category, known categories)."""
    pages = group_pages(rows)
    return pages, filter_by_category(pages, category), report_categories(pages)
