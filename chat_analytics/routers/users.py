from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import require_document
from ..schemas.analytics import AnalyticsDocument
from ..schemas.user import (
    CommenterListResponse,
    UserCommentsResponse,
    WatchlistAdd,
    WatchlistResponse,
    WatchToggleResponse,
)
from ..services.analytics import get_document
from ..services.commenters import (
    COMMENT_LIMIT,
    commenter_name,
    leaderboard,
    search_commenters,
    user_comments,
    watched_users,
)
from ..services.watchlist import WatchlistStore, get_watchlist_store

router = APIRouter(prefix="/users", tags=["users"])


def _watched_ids(store: WatchlistStore) -> set:
    return {entry.user_id for entry in store.list()}


@router.get("/leaderboard", response_model=CommenterListResponse)
async def get_leaderboard(
    document: AnalyticsDocument = Depends(require_document),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Get the top commenters."""
    users = leaderboard(document.top_commenters, _watched_ids(store))
    return CommenterListResponse(users=users, total=len(users))


@router.get("/search", response_model=CommenterListResponse)
async def search_users(
    q: str = "",
    document: AnalyticsDocument = Depends(require_document),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Search commenters by name."""
    users = search_commenters(document.all_commenters, q, _watched_ids(store))
    return CommenterListResponse(users=users, total=len(users))


@router.get("/watchlist", response_model=WatchlistResponse)
async def get_watchlist(
    document: AnalyticsDocument = Depends(require_document),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Get watched users with their latest exported stats."""
    entries = store.list()
    users = watched_users(document.all_commenters, entries)
    return WatchlistResponse(entries=entries, users=users, total=len(entries))


@router.post("/watchlist", response_model=WatchToggleResponse)
async def add_to_watchlist(
    user: WatchlistAdd,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Add a user to the watchlist. Adding a watched user changes nothing."""
    store.add(user.user_id, user.name)
    return WatchToggleResponse(user_id=user.user_id, watched=True, total=len(store))


@router.delete("/watchlist/{user_id}", response_model=WatchToggleResponse)
async def remove_from_watchlist(
    user_id: str,
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Remove a user from the watchlist."""
    store.remove(user_id)
    return WatchToggleResponse(user_id=user_id, watched=False, total=len(store))


@router.post("/watchlist/{user_id}/toggle", response_model=WatchToggleResponse)
async def toggle_watchlist(
    user_id: str,
    name: str = "",
    document: Optional[AnalyticsDocument] = Depends(get_document),
    store: WatchlistStore = Depends(get_watchlist_store),
):
    """Flip a user's watched state. Without a name, the exported one is stored."""
    if not name and document is not None:
        name = commenter_name(document.all_commenters, user_id)
    watched = store.toggle(user_id, name)
    return WatchToggleResponse(user_id=user_id, watched=watched, total=len(store))


@router.get("/{user_id}/comments", response_model=UserCommentsResponse)
async def get_user_comments(
    user_id: str,
    limit: int = Query(COMMENT_LIMIT, ge=1, le=100),
    document: AnalyticsDocument = Depends(require_document),
):
    """Get a user's recent comments."""
    comments = user_comments(document.user_comments, user_id, limit)
    return UserCommentsResponse(user_id=user_id, comments=comments, total=len(comments))
