import json
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chat_analytics.db import init_db
from chat_analytics.services.watchlist import (
    DatabaseBackend,
    FileBackend,
    MemoryBackend,
    WatchlistStore,
)


class TestWatchlistStore:
    def test_starts_empty(self, store):
        assert store.list() == []
        assert not store.contains("u1")

    def test_add_is_idempotent(self, store):
        assert store.add("u1", "Maria")
        assert not store.add("u1", "Maria again")
        assert len(store) == 1
        assert store.list()[0].name == "Maria"

    def test_add_then_remove_restores_prior_state(self, store):
        store.add("u1", "Maria")
        before = store.list()
        store.add("u2", "Jose")
        store.remove("u2")
        assert store.list() == before

    def test_remove_missing_is_noop(self, store):
        store.add("u1", "Maria")
        assert not store.remove("u9")
        assert [e.user_id for e in store.list()] == ["u1"]

    def test_toggle(self, store):
        assert store.toggle("u1", "Maria") is True
        assert store.contains("u1")
        assert store.toggle("u1") is False
        assert not store.contains("u1")

    def test_added_at_is_set(self, store):
        store.add("u1", "Maria")
        assert store.list()[0].added_at

    def test_every_mutation_is_persisted(self):
        backend = MemoryBackend()
        store = WatchlistStore(backend)
        store.add("u1", "Maria")
        assert [e["userId"] for e in json.loads(backend.value)] == ["u1"]
        store.remove("u1")
        assert json.loads(backend.value) == []

    def test_reload_restores_membership(self):
        backend = MemoryBackend()
        store = WatchlistStore(backend)
        store.add("u1", "Maria")
        store.add("u2", "Jose")
        store.remove("u1")

        reloaded = WatchlistStore(backend)
        assert not reloaded.contains("u1")
        assert reloaded.contains("u2")
        assert reloaded.list() == store.list()

    def test_persisted_format(self):
        backend = MemoryBackend()
        WatchlistStore(backend).add("u1", "Maria")
        entry = json.loads(backend.value)[0]
        assert set(entry) == {"userId", "name", "addedAt"}

    @pytest.mark.parametrize("payload", ["not json", "{\"userId\": \"u1\"}", "[{\"name\": \"no id\"}]", "null"])
    def test_corrupt_payload_starts_empty(self, payload, caplog):
        store = WatchlistStore(MemoryBackend(payload))
        assert store.list() == []
        assert "Error loading watchlist" in caplog.text

    def test_duplicate_ids_in_payload_are_collapsed(self):
        payload = json.dumps([
            {"userId": "u1", "name": "first", "addedAt": "2024-01-01T00:00:00+00:00"},
            {"userId": "u1", "name": "second", "addedAt": "2024-01-02T00:00:00+00:00"},
        ])
        store = WatchlistStore(MemoryBackend(payload))
        assert [e.name for e in store.list()] == ["first"]


class FailingBackend(MemoryBackend):
    def __init__(self, value=None):
        super().__init__(value)
        self.fail = False

    def save(self, value):
        if self.fail:
            raise OSError("disk full")
        super().save(value)


class TestFailedWrites:
    def test_failed_add_leaves_store_unchanged(self):
        backend = FailingBackend()
        backend.fail = True
        store = WatchlistStore(backend)
        with pytest.raises(OSError):
            store.add("u1", "Maria")
        assert not store.contains("u1")
        assert store.list() == []

    def test_failed_remove_keeps_entry(self):
        backend = FailingBackend()
        store = WatchlistStore(backend)
        store.add("u1", "Maria")
        backend.fail = True
        with pytest.raises(OSError):
            store.remove("u1")
        assert store.contains("u1")
        assert WatchlistStore(MemoryBackend(backend.value)).contains("u1")

    def test_failed_toggle_keeps_state(self):
        backend = FailingBackend()
        store = WatchlistStore(backend)
        backend.fail = True
        with pytest.raises(OSError):
            store.toggle("u1", "Maria")
        assert not store.contains("u1")


class TestToggle:
    def test_toggle_writes_once_per_call(self):
        writes = []

        class CountingBackend(MemoryBackend):
            def save(self, value):
                writes.append(value)
                super().save(value)

        backend = CountingBackend()
        store = WatchlistStore(backend)
        store.toggle("u1", "Maria")
        store.toggle("u1")
        assert len(writes) == 2
        assert [e["userId"] for e in json.loads(writes[0])] == ["u1"]
        assert json.loads(writes[1]) == []

    def test_concurrent_toggles_pair_up(self):
        store = WatchlistStore(MemoryBackend())
        threads = [threading.Thread(target=store.toggle, args=("u1", "Maria")) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        # An even number of flips ends where it started
        assert not store.contains("u1")
        assert len(store) == 0


class TestFileBackend:
    def test_missing_file_loads_none(self, tmp_path):
        assert FileBackend(tmp_path / "watchlist.json").load() is None

    def test_round_trip_through_store(self, tmp_path):
        path = tmp_path / "nested" / "watchlist.json"
        WatchlistStore(FileBackend(path)).add("u1", "Maria")
        assert WatchlistStore(FileBackend(path)).contains("u1")

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "watchlist.json"
        path.write_text("[{broken", encoding="utf-8")
        assert WatchlistStore(FileBackend(path)).list() == []


class TestDatabaseBackend:
    @pytest.fixture
    def session_factory(self):
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        init_db(engine)
        return sessionmaker(bind=engine)

    def test_missing_key_loads_none(self, session_factory):
        assert DatabaseBackend(session_factory).load() is None

    def test_round_trip_through_store(self, session_factory):
        store = WatchlistStore(DatabaseBackend(session_factory))
        store.add("u1", "Maria")
        store.add("u2", "Jose")
        reloaded = WatchlistStore(DatabaseBackend(session_factory))
        assert [e.user_id for e in reloaded.list()] == ["u1", "u2"]

    def test_keys_are_scoped(self, session_factory):
        WatchlistStore(DatabaseBackend(session_factory, "team_a")).add("u1", "Maria")
        assert WatchlistStore(DatabaseBackend(session_factory, "team_b")).list() == []
