from fastapi import APIRouter, Depends

from ..deps import require_document, date_range_params
from ..schemas.analytics import AnalyticsDocument
from ..schemas.stats import AppliedRange, DashboardResponse, MessagesResponse
from ..services.pipeline import aggregate, filter_by_range

router = APIRouter(tags=["dashboard"])

TOP_PAGES_LIMIT = 8


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    document: AnalyticsDocument = Depends(require_document),
):
    """Get headline totals, shift response times, top pages and the recent trend."""
    return DashboardResponse(
        totals=document.totals,
        shift_stats=document.shift_stats,
        top_pages=document.top_pages[:TOP_PAGES_LIMIT],
        daily_trend=document.daily_trend,
        last_sync=document.last_sync,
    )


@router.get("/messages", response_model=MessagesResponse)
async def get_messages(
    date_range: AppliedRange = Depends(date_range_params),
    document: AnalyticsDocument = Depends(require_document),
):
    """Get message analytics; totals are recomputed when a range is given."""
    if date_range.filtered:
        days = filter_by_range(document.daily_stats, date_range.start, date_range.end)
        totals = aggregate(days).model_dump(by_alias=True)
    else:
        totals = document.totals

    timeframe_totals = {"total": 0, "received": 0, "sent": 0}
    for row in document.messages_by_timeframe:
        for key in timeframe_totals:
            timeframe_totals[key] += row.get(key) or 0

    return MessagesResponse(
        range=date_range,
        totals=totals,
        message_stats=document.message_stats,
        hourly_distribution=document.hourly_distribution,
        messages_by_timeframe=document.messages_by_timeframe,
        timeframe_totals=timeframe_totals,
    )
