from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional

from .stats import Counters, DailyStat, DateRange, zero_if_missing


class PageStat(BaseModel):
    """Per-page totals over the whole export."""
    page_id: Optional[str] = Field(default=None, alias="pageId")
    name: str = ""
    category: Optional[str] = None
    messages: Optional[int] = None
    sessions: Optional[int] = None
    avg_response_time: Optional[float] = Field(default=None, alias="avgResponseTime")
    avg_duration: Optional[float] = Field(default=None, alias="avgDuration")

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("name", mode="before")
    @classmethod
    def missing_name_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class CategoryStat(BaseModel):
    """Per-category totals; page_count is computed by the exporter."""
    category: str
    page_count: int = Field(default=0, alias="pageCount")
    messages: int = 0
    incoming: int = 0
    outgoing: int = 0
    sessions: int = 0

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("page_count", "messages", "incoming", "outgoing", "sessions", mode="before")
    @classmethod
    def missing_is_zero(cls, value: Any) -> Any:
        return zero_if_missing(value)


class PageShiftPerformance(BaseModel):
    """One (page, shift) row of the management report."""
    page_id: Optional[str] = Field(default=None, alias="pageId")
    name: str
    category: Optional[str] = None
    shift: str
    messages: Optional[int] = None
    incoming: Optional[int] = None
    outgoing: Optional[int] = None
    sessions: Optional[int] = None
    avg_response_time: Optional[float] = Field(default=None, alias="avgResponseTime")

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)


class Commenter(BaseModel):
    """A user who commented on at least one tracked page."""
    user_id: str = Field(alias="userId")
    name: str = ""
    comment_count: int = Field(default=0, alias="commentCount")
    pages_commented: Optional[int] = Field(default=None, alias="pagesCommented")
    first_comment: Optional[str] = Field(default=None, alias="firstComment")
    last_comment: Optional[str] = Field(default=None, alias="lastComment")

    # Exporters may emit numeric platform ids
    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("name", mode="before")
    @classmethod
    def missing_name_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("comment_count", mode="before")
    @classmethod
    def missing_is_zero(cls, value: Any) -> Any:
        return zero_if_missing(value)


class AnalyticsDocument(BaseModel):
    """The exported analytics.json. Every section is optional."""
    totals: Dict[str, Any] = Field(default_factory=dict)
    shift_stats: List[Dict[str, Any]] = Field(default_factory=list, alias="shiftStats")
    top_pages: List[Dict[str, Any]] = Field(default_factory=list, alias="topPages")
    daily_trend: List[Dict[str, Any]] = Field(default_factory=list, alias="dailyTrend")
    daily_stats: List[DailyStat] = Field(default_factory=list, alias="dailyStats")
    daily_shift_stats: Dict[str, Dict[str, Counters]] = Field(default_factory=dict, alias="dailyShiftStats")
    daily_category_stats: Dict[str, Dict[str, Counters]] = Field(default_factory=dict, alias="dailyCategoryStats")
    date_range: DateRange = Field(default_factory=DateRange, alias="dateRange")
    message_stats: Dict[str, Any] = Field(default_factory=dict, alias="messageStats")
    hourly_distribution: List[Dict[str, Any]] = Field(default_factory=list, alias="hourlyDistribution")
    messages_by_timeframe: List[Dict[str, Any]] = Field(default_factory=list, alias="messagesByTimeframe")
    shift_comments: List[Dict[str, Any]] = Field(default_factory=list, alias="shiftComments")
    category_shift_stats: List[Dict[str, Any]] = Field(default_factory=list, alias="categoryShiftStats")
    page_stats: List[PageStat] = Field(default_factory=list, alias="pageStats")
    category_stats: List[CategoryStat] = Field(default_factory=list, alias="categoryStats")
    page_shift_performance: List[PageShiftPerformance] = Field(default_factory=list, alias="pageShiftPerformance")
    all_commenters: List[Commenter] = Field(default_factory=list, alias="allCommenters")
    top_commenters: List[Commenter] = Field(default_factory=list, alias="topCommenters")
    user_comments: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict, alias="userComments")
    last_sync: Optional[str] = Field(default=None, alias="lastSync")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # A null section falls back to its empty default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data
