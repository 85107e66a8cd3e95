from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from typing import Dict, List, Optional, Any


class Shift(str, Enum):
    """The three fixed operating windows, in display order."""
    MORNING = "Morning"
    MID = "Mid"
    EVENING = "Evening"


SHIFT_HOURS = {
    Shift.MORNING: "6:00 AM - 2:00 PM",
    Shift.MID: "2:00 PM - 10:00 PM",
    Shift.EVENING: "10:00 PM - 6:00 AM",
}


def zero_if_missing(value: Any) -> Any:
    return 0 if value is None else value


class Counters(BaseModel):
    """Message counters for one shift or category bucket."""
    messages: int = Field(default=0, ge=0)
    incoming: int = Field(default=0, ge=0)
    outgoing: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="ignore")

    @field_validator("messages", "incoming", "outgoing", mode="before")
    @classmethod
    def missing_is_zero(cls, value: Any) -> Any:
        return zero_if_missing(value)


# date -> shift label -> counters
DailyShiftStats = Dict[str, Dict[str, Counters]]

# date -> category name -> counters
DailyCategoryStats = Dict[str, Dict[str, Counters]]


class DailyStat(BaseModel):
    """One calendar day of activity as exported by the sync job."""
    date: str
    messages: int = Field(default=0, ge=0)
    incoming: int = Field(default=0, ge=0)
    outgoing: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    hidden: int = Field(default=0, ge=0)
    replies: int = Field(default=0, ge=0)
    with_replies: int = Field(default=0, ge=0, alias="withReplies")
    sessions: int = Field(default=0, ge=0)
    avg_response_time: Optional[float] = Field(default=None, alias="avgResponseTime")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @field_validator(
        "messages", "incoming", "outgoing", "comments", "hidden",
        "replies", "with_replies", "sessions",
        mode="before",
    )
    @classmethod
    def missing_is_zero(cls, value: Any) -> Any:
        return zero_if_missing(value)


class AggregateSummary(BaseModel):
    """Totals over a set of days, with a session-weighted response time."""
    messages: int = 0
    incoming: int = 0
    outgoing: int = 0
    comments: int = 0
    hidden: int = 0
    replies: int = 0
    with_replies: int = Field(default=0, alias="withReplies")
    sessions: int = 0
    response_time_sum: float = Field(default=0, alias="responseTimeSum")
    response_time_count: int = Field(default=0, alias="responseTimeCount")
    avg_response_time: Optional[int] = Field(default=None, alias="avgResponseTime")

    model_config = ConfigDict(populate_by_name=True)


class DateRange(BaseModel):
    """Bounds of the available data."""
    min_date: Optional[str] = Field(default=None, alias="minDate")
    max_date: Optional[str] = Field(default=None, alias="maxDate")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AppliedRange(BaseModel):
    """The range a response was computed over; empty bounds mean unfiltered."""
    start: Optional[str] = None
    end: Optional[str] = None
    filtered: bool = False


class DailyStatsResponse(BaseModel):
    """Daily series restricted to a range."""
    range: AppliedRange
    days: List[DailyStat]
    total: int


class SummaryResponse(BaseModel):
    """Aggregate of the daily series over a range."""
    range: AppliedRange
    days: int
    summary: AggregateSummary


class PresetsResponse(BaseModel):
    """Quick date filters resolved against the document's date range."""
    date_range: DateRange = Field(alias="dateRange")
    presets: Dict[str, AppliedRange]

    model_config = ConfigDict(populate_by_name=True)


class DashboardResponse(BaseModel):
    """Landing page data."""
    totals: Dict[str, Any]
    shift_stats: List[Dict[str, Any]] = Field(alias="shiftStats")
    top_pages: List[Dict[str, Any]] = Field(alias="topPages")
    daily_trend: List[Dict[str, Any]] = Field(alias="dailyTrend")
    last_sync: Optional[str] = Field(default=None, alias="lastSync")

    model_config = ConfigDict(populate_by_name=True)


class MessagesResponse(BaseModel):
    """Message analytics page data."""
    range: AppliedRange
    totals: Dict[str, Any]
    message_stats: Dict[str, Any] = Field(alias="messageStats")
    hourly_distribution: List[Dict[str, Any]] = Field(alias="hourlyDistribution")
    messages_by_timeframe: List[Dict[str, Any]] = Field(alias="messagesByTimeframe")
    timeframe_totals: Dict[str, int] = Field(alias="timeframeTotals")

    model_config = ConfigDict(populate_by_name=True)
