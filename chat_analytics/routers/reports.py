from fastapi import APIRouter, Depends, HTTPException

from ..deps import require_document
from ..schemas.analytics import AnalyticsDocument
from ..schemas.report import ReportResponse
from ..services.report import ALL_CATEGORIES, build_report, grand_totals, shift_summary

router = APIRouter(prefix="/reports", tags=["reports"])

NO_REPORT_MESSAGE = "No report data available. Run the export script first."


@router.get("", response_model=ReportResponse)
async def get_report(
    category: str = ALL_CATEGORIES,
    document: AnalyticsDocument = Depends(require_document),
):
    """Get the management report, optionally for a single page category."""
    if not document.page_shift_performance:
        raise HTTPException(status_code=503, detail=NO_REPORT_MESSAGE)

    pages, selected, categories = build_report(document.page_shift_performance, category)
    if category != ALL_CATEGORIES and category not in categories:
        raise HTTPException(status_code=404, detail="Category not found")

    return ReportResponse(
        category=category,
        categories=categories,
        date_range=document.date_range,
        pages=selected,
        page_count=len(selected),
        total_page_count=len(pages),
        grand_totals=grand_totals(selected),
        shift_summary=shift_summary(selected),
        avg_response_time=document.totals.get("avgResponseTime"),
    )
