from fastapi import APIRouter, Depends

from ..deps import require_document, date_range_params
from ..schemas.analytics import AnalyticsDocument
from ..schemas.rollup import ShiftRow, ShiftsResponse
from ..schemas.stats import AppliedRange, SHIFT_HOURS
from ..services.pipeline import rollup_by_shift

router = APIRouter(prefix="/shifts", tags=["shifts"])


@router.get("", response_model=ShiftsResponse)
async def get_shifts(
    date_range: AppliedRange = Depends(date_range_params),
    document: AnalyticsDocument = Depends(require_document),
):
    """Get the three-shift breakdown over a date range."""
    rollup = rollup_by_shift(document.daily_shift_stats, date_range.start, date_range.end)
    exported = {row.get("shift"): row for row in document.shift_stats}

    shifts = []
    for shift, counters in rollup.items():
        row = ShiftRow(shift=shift.value, hours=SHIFT_HOURS[shift], **counters.model_dump())
        # Session and timing figures exist only for the whole export
        if not date_range.filtered and shift.value in exported:
            stats = exported[shift.value]
            row.sessions = stats.get("sessions")
            row.avg_response_time = stats.get("avgResponseTime")
            row.avg_duration = stats.get("avgDuration")
        shifts.append(row)

    return ShiftsResponse(
        range=date_range,
        shifts=shifts,
        shift_comments=document.shift_comments,
        category_shift_stats=document.category_shift_stats,
    )
