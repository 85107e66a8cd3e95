from fastapi import APIRouter, Depends

from ..deps import require_document, date_range_params
from ..schemas.analytics import AnalyticsDocument
from ..schemas.stats import (
    AppliedRange,
    DailyStatsResponse,
    PresetsResponse,
    SummaryResponse,
)
from ..services.pipeline import PRESETS, aggregate, filter_by_range, is_bounded, preset_range

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/daily", response_model=DailyStatsResponse)
async def get_daily_stats(
    date_range: AppliedRange = Depends(date_range_params),
    document: AnalyticsDocument = Depends(require_document),
):
    """Get the daily series, optionally restricted to a date range."""
    days = filter_by_range(document.daily_stats, date_range.start, date_range.end)
    return DailyStatsResponse(range=date_range, days=list(days), total=len(days))


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    date_range: AppliedRange = Depends(date_range_params),
    document: AnalyticsDocument = Depends(require_document),
):
    """Get totals and weighted response time over a date range."""
    days = filter_by_range(document.daily_stats, date_range.start, date_range.end)
    return SummaryResponse(range=date_range, days=len(days), summary=aggregate(days))


@router.get("/presets", response_model=PresetsResponse)
async def get_presets(
    document: AnalyticsDocument = Depends(require_document),
):
    """Resolve the quick date filters against the available data."""
    presets = {}
    for name in PRESETS:
        start, end = preset_range(name, document.date_range)
        presets[name] = AppliedRange(start=start, end=end, filtered=is_bounded(start, end))
    return PresetsResponse(date_range=document.date_range, presets=presets)
