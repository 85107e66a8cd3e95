"""Leaderboard, search and watchlist views over the exported commenters."""

from typing import Any, Dict, List, Sequence

from ..schemas.analytics import Commenter
from ..schemas.user import CommenterRow, WatchlistEntry

SEARCH_LIMIT = 50
COMMENT_LIMIT = 20


def _row(commenter: Commenter, **extra) -> CommenterRow:
    data = commenter.model_dump(by_alias=True)
    data.update(extra)
    return CommenterRow.model_validate(data)


def leaderboard(top_commenters: Sequence[Commenter], watched_ids: set) -> List[CommenterRow]:
    """Top commenters in exported order, ranked from 1."""
    return [
        _row(user, rank=index + 1, watched=user.user_id in watched_ids)
        for index, user in enumerate(top_commenters)
    ]


def search_commenters(
    all_commenters: Sequence[Commenter],
    query: str,
    watched_ids: set,
    limit: int = SEARCH_LIMIT,
) -> List[CommenterRow]:
    """Case-insensitive name match. A blank query finds nobody."""
    needle = query.strip().lower()
    if not needle:
        return []
    matches = [user for user in all_commenters if needle in user.name.lower()]
    return [_row(user, watched=user.user_id in watched_ids) for user in matches[:limit]]


def commenter_name(all_commenters: Sequence[Commenter], user_id: str) -> str:
    """Display name of an exported commenter, blank when unknown."""
    for user in all_commenters:
        if user.user_id == user_id:
            return user.name
    return ""


def watched_users(
    all_commenters: Sequence[Commenter],
    entries: Sequence[WatchlistEntry],
) -> List[CommenterRow]:
    """Watched users in watchlist order, skipping ids missing from the export."""
    by_id = {}
    for user in all_commenters:
        by_id.setdefault(user.user_id, user)

    rows = []
    for entry in entries:
        user = by_id.get(entry.user_id)
        if user is not None:
            rows.append(_row(user, watched=True, addedAt=entry.added_at))
    return rows


def user_comments(
    comments_by_user: Dict[str, List[Dict[str, Any]]],
    user_id: str,
    limit: int = COMMENT_LIMIT,
) -> List[Dict[str, Any]]:
    return comments_by_user.get(user_id, [])[:limit]
