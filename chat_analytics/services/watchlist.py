"""
Watchlist Store - a small persisted set of commenters to keep an eye on.

The full list is rewritten to a single key/value slot after every change and
read back once when the store is created. A missing or unreadable slot
starts an empty watchlist. Multiple processes sharing one slot get
last-write-wins.
"""

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..config import Settings, get_settings
from ..schemas.user import WatchlistEntry

logger = logging.getLogger(__name__)

DEFAULT_KEY = "chat_analytics_watchlist"

_entries_adapter = TypeAdapter(List[WatchlistEntry])


class MemoryBackend:
    """Keeps the slot in memory."""

    def __init__(self, value: Optional[str] = None):
        self.value = value

    def load(self) -> Optional[str]:
        return self.value

    def save(self, value: str) -> None:
        self.value = value


class FileBackend:
    """Keeps the slot in a JSON file."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def save(self, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(self.path)


class DatabaseBackend:
    """Keeps the slot as one row of the local_storage table."""

    def __init__(self, session_factory, key: str = DEFAULT_KEY):
        self.session_factory = session_factory
        self.key = key

    def load(self) -> Optional[str]:
        from ..db import StoredValue

        db = self.session_factory()
        try:
            row = db.query(StoredValue).filter(StoredValue.key == self.key).first()
            return row.value if row else None
        finally:
            db.close()

    def save(self, value: str) -> None:
        from ..db import StoredValue

        db = self.session_factory()
        try:
            row = db.query(StoredValue).filter(StoredValue.key == self.key).first()
            if row:
                row.value = value
            else:
                db.add(StoredValue(key=self.key, value=value))
            db.commit()
        finally:
            db.close()


class WatchlistStore:
    """Watched user ids with display name and time added; one entry per id."""

    def __init__(self, backend):
        self.backend = backend
        self._lock = threading.Lock()
        self._entries: List[WatchlistEntry] = self._load()

    def _load(self) -> List[WatchlistEntry]:
        try:
            raw = self.backend.load()
        except (OSError, ValueError, SQLAlchemyError) as e:
            logger.error(f"Error reading watchlist: {e}")
            return []

        if not raw:
            return []

        try:
            entries = _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Error loading watchlist, starting empty: {e.error_count()} errors")
            return []

        # Keep the first entry for each id
        seen = set()
        unique = []
        for entry in entries:
            if entry.user_id not in seen:
                seen.add(entry.user_id)
                unique.append(entry)
        return unique

    def _commit(self, entries: List[WatchlistEntry]) -> None:
        # Only adopt the new list once the backend has accepted it
        payload = _entries_adapter.dump_json(entries, by_alias=True)
        self.backend.save(payload.decode("utf-8"))
        self._entries = entries

    def _index(self, user_id: str) -> Optional[int]:
        for i, entry in enumerate(self._entries):
            if entry.user_id == user_id:
                return i
        return None

    def _with_added(self, user_id: str, name: str) -> List[WatchlistEntry]:
        return self._entries + [WatchlistEntry(
            user_id=user_id,
            name=name,
            added_at=datetime.now(timezone.utc).isoformat(),
        )]

    def _without(self, user_id: str) -> List[WatchlistEntry]:
        return [entry for entry in self._entries if entry.user_id != user_id]

    def list(self) -> List[WatchlistEntry]:
        with self._lock:
            return list(self._entries)

    def contains(self, user_id: str) -> bool:
        with self._lock:
            return self._index(user_id) is not None

    def add(self, user_id: str, name: str = "") -> bool:
        """Add a user. Returns False if already watched."""
        with self._lock:
            if self._index(user_id) is not None:
                return False
            self._commit(self._with_added(user_id, name))
        logger.info(f"Added {user_id} to watchlist")
        return True

    def remove(self, user_id: str) -> bool:
        """Remove a user. Returns False if not watched."""
        with self._lock:
            if self._index(user_id) is None:
                return False
            self._commit(self._without(user_id))
        logger.info(f"Removed {user_id} from watchlist")
        return True

    def toggle(self, user_id: str, name: str = "") -> bool:
        """Flip a user's watched state in one step. Returns the new state."""
        with self._lock:
            watched = self._index(user_id) is None
            if watched:
                self._commit(self._with_added(user_id, name))
            else:
                self._commit(self._without(user_id))
        logger.info(f"Toggled {user_id} on watchlist (watched={watched})")
        return watched

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def create_backend(settings: Settings):
    """Build the persistence backend named in settings."""
    if settings.watchlist_backend == "memory":
        return MemoryBackend()
    if settings.watchlist_backend == "database":
        from ..db import SessionLocal, init_db

        init_db()
        return DatabaseBackend(SessionLocal, settings.watchlist_key)
    if settings.watchlist_backend == "file":
        return FileBackend(settings.watchlist_path)
    raise ValueError(f"Unknown watchlist backend: {settings.watchlist_backend}")


# Singleton instance
_watchlist_store: Optional[WatchlistStore] = None


def init_watchlist_store(settings: Optional[Settings] = None) -> WatchlistStore:
    """Initialize the watchlist store singleton."""
    global _watchlist_store
    settings = settings or get_settings()
    _watchlist_store = WatchlistStore(create_backend(settings))
    logger.info(f"Watchlist store initialized ({settings.watchlist_backend}, {len(_watchlist_store)} entries)")
    return _watchlist_store


def get_watchlist_store() -> WatchlistStore:
    """Get the watchlist store singleton, initializing it on first use."""
    global _watchlist_store
    if _watchlist_store is None:
        init_watchlist_store()
    return _watchlist_store
