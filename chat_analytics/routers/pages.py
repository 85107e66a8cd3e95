from fastapi import APIRouter, Depends
from typing import Literal

from ..deps import require_document, date_range_params
from ..schemas.analytics import AnalyticsDocument
from ..schemas.report import PageListResponse
from ..schemas.rollup import CategoriesResponse, CategoryRollupRow
from ..schemas.stats import AppliedRange
from ..services.pipeline import rollup_by_category
from ..services.report import sort_pages

router = APIRouter(prefix="/pages", tags=["pages"])

SORT_COLUMNS = {
    "messages": "messages",
    "sessions": "sessions",
    "avgResponseTime": "avg_response_time",
    "avgDuration": "avg_duration",
}


@router.get("", response_model=PageListResponse)
async def list_pages(
    sort_by: Literal["messages", "sessions", "avgResponseTime", "avgDuration"] = "messages",
    order: Literal["asc", "desc"] = "desc",
    document: AnalyticsDocument = Depends(require_document),
):
    """List pages sorted by one column."""
    pages = sort_pages(document.page_stats, SORT_COLUMNS[sort_by], descending=order == "desc")
    return PageListResponse(pages=pages, sort_by=sort_by, order=order, total=len(pages))


@router.get("/categories", response_model=CategoriesResponse)
async def get_categories(
    date_range: AppliedRange = Depends(date_range_params),
    document: AnalyticsDocument = Depends(require_document),
):
    """Get message counters per page category over a date range."""
    rollup = rollup_by_category(
        document.daily_category_stats,
        date_range.start,
        date_range.end,
        document.category_stats,
    )
    categories = [
        CategoryRollupRow(category=name, page_count=page_count, **counters.model_dump())
        for name, (counters, page_count) in rollup.items()
    ]
    return CategoriesResponse(range=date_range, categories=categories)
