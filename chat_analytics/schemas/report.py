from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from .analytics import PageShiftPerformance, PageStat
from .stats import DateRange


class PageTotals(BaseModel):
    """Per-page totals summed over its shifts."""
    messages: int = 0
    incoming: int = 0
    outgoing: int = 0
    sessions: int = 0


class ReportPage(BaseModel):
    """A page of the management report with its shift rows."""
    name: str
    page_id: Optional[str] = Field(default=None, alias="pageId")
    category: Optional[str] = None
    shifts: Dict[str, PageShiftPerformance]
    totals: PageTotals

    model_config = ConfigDict(populate_by_name=True)


class ShiftSummary(BaseModel):
    """Messages and sessions for one shift across the reported pages."""
    shift: str
    hours: str
    messages: int = 0
    sessions: int = 0


class ReportResponse(BaseModel):
    """Management report."""
    category: str
    categories: List[str]
    date_range: DateRange = Field(alias="dateRange")
    pages: List[ReportPage]
    page_count: int = Field(alias="pageCount")
    total_page_count: int = Field(alias="totalPageCount")
    grand_totals: PageTotals = Field(alias="grandTotals")
    shift_summary: List[ShiftSummary] = Field(alias="shiftSummary")
    avg_response_time: Optional[float] = Field(default=None, alias="avgResponseTime")

    model_config = ConfigDict(populate_by_name=True)


class PageListResponse(BaseModel):
    """Sorted page table."""
    pages: List[PageStat]
    sort_by: str = Field(alias="sortBy")
    order: str
    total: int

    model_config = ConfigDict(populate_by_name=True)
