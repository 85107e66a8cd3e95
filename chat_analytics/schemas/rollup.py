from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from .stats import AppliedRange


class ShiftRow(BaseModel):
    """One shift of the shift breakdown."""
    shift: str
    hours: str
    messages: int = 0
    incoming: int = 0
    outgoing: int = 0
    sessions: Optional[int] = None
    # Only known for the unfiltered export; daily data carries no per-shift response time
    avg_response_time: Optional[float] = Field(default=None, alias="avgResponseTime")
    avg_duration: Optional[float] = Field(default=None, alias="avgDuration")

    model_config = ConfigDict(populate_by_name=True)


class ShiftsResponse(BaseModel):
    """Shift analytics page data."""
    range: AppliedRange
    shifts: List[ShiftRow]
    shift_comments: List[Dict[str, Any]] = Field(alias="shiftComments")
    category_shift_stats: List[Dict[str, Any]] = Field(alias="categoryShiftStats")

    model_config = ConfigDict(populate_by_name=True)


class CategoryRollupRow(BaseModel):
    """Counters for one page category over a range."""
    category: str
    page_count: int = Field(default=0, alias="pageCount")
    messages: int = 0
    incoming: int = 0
    outgoing: int = 0

    model_config = ConfigDict(populate_by_name=True)


class CategoriesResponse(BaseModel):
    """Category rollup over a range."""
    range: AppliedRange
    categories: List[CategoryRollupRow]
