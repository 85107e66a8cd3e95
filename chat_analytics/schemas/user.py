from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from .analytics import Commenter


class WatchlistEntry(BaseModel):
    """A user flagged for ongoing attention."""
    user_id: str = Field(alias="userId")
    name: str = ""
    added_at: str = Field(alias="addedAt")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WatchlistAdd(BaseModel):
    """Add a user to the watchlist."""
    user_id: str = Field(alias="userId", min_length=1)
    name: str = ""

    model_config = ConfigDict(populate_by_name=True)


class CommenterRow(Commenter):
    """Commenter as listed in the leaderboard, search and watchlist tabs."""
    rank: Optional[int] = None
    watched: bool = False
    added_at: Optional[str] = Field(default=None, alias="addedAt")


class CommenterListResponse(BaseModel):
    """List of commenters."""
    users: List[CommenterRow]
    total: int


class WatchlistResponse(BaseModel):
    """Stored watchlist entries and the matching commenters."""
    entries: List[WatchlistEntry]
    users: List[CommenterRow]
    total: int


class WatchToggleResponse(BaseModel):
    """Outcome of a watchlist mutation."""
    user_id: str = Field(alias="userId")
    watched: bool
    total: int

    model_config = ConfigDict(populate_by_name=True)


class UserCommentsResponse(BaseModel):
    """Recent comments of one user."""
    user_id: str = Field(alias="userId")
    comments: List[Dict[str, Any]]
    total: int

    model_config = ConfigDict(populate_by_name=True)
