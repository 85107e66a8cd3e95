import pytest
from fastapi.testclient import TestClient

from chat_analytics.main import app
from chat_analytics.schemas.analytics import AnalyticsDocument
from chat_analytics.services.analytics import get_document
from chat_analytics.services.watchlist import MemoryBackend, WatchlistStore, get_watchlist_store


SAMPLE_DOCUMENT = {
    "totals": {"messages": 100, "sessions": 12, "pages": 3, "avgResponseTime": 70},
    "shiftStats": [
        {"shift": "Morning", "sessions": 5, "avgResponseTime": 40, "avgDuration": 300},
        {"shift": "Mid", "sessions": 4, "avgResponseTime": 80, "avgDuration": 200},
        {"shift": "Evening", "sessions": 3, "avgResponseTime": 120, "avgDuration": 100},
    ],
    "topPages": [{"name": f"Page {i}", "messages": 100 - i} for i in range(10)],
    "dailyTrend": [{"date": "2024-01-03", "messages": 40}],
    "dailyStats": [
        {"date": "2024-01-01", "messages": 10, "incoming": 6, "outgoing": 4, "sessions": 2, "avgResponseTime": 100},
        {"date": "2024-01-02", "messages": 20, "incoming": 12, "outgoing": 8, "sessions": 8, "avgResponseTime": 50},
        {"date": "2024-01-03", "messages": 70, "incoming": 40, "outgoing": 30, "sessions": 2, "avgResponseTime": None},
    ],
    "dailyShiftStats": {
        "2024-01-01": {
            "Morning": {"messages": 6, "incoming": 4, "outgoing": 2},
            "Evening": {"messages": 4, "incoming": 2, "outgoing": 2},
        },
        "2024-01-02": {
            "Mid": {"messages": 20, "incoming": 12, "outgoing": 8},
        },
        "2024-01-03": {
            "Morning": {"messages": 70, "incoming": 40, "outgoing": 30},
        },
    },
    "dailyCategoryStats": {
        "2024-01-01": {"Hosts": {"messages": 10, "incoming": 6, "outgoing": 4}},
        "2024-01-02": {"Hosts": {"messages": 5, "incoming": 3, "outgoing": 2},
                       "Babes": {"messages": 15, "incoming": 9, "outgoing": 6}},
    },
    "categoryStats": [
        {"category": "Hosts", "pageCount": 2},
        {"category": "Babes", "pageCount": 1},
        {"category": "Others", "pageCount": 4},
    ],
    "dateRange": {"minDate": "2024-01-01", "maxDate": "2024-01-03"},
    "messageStats": {"incoming": 58, "outgoing": 42},
    "hourlyDistribution": [{"hour": 9, "messages": 12}],
    "messagesByTimeframe": [
        {"timeframe": "Today", "total": 70, "received": 40, "sent": 30},
        {"timeframe": "Yesterday", "total": 20, "received": 12, "sent": None},
    ],
    "pageStats": [
        {"pageId": "p1", "name": "Alpha", "messages": 50, "sessions": 3, "avgResponseTime": 90},
        {"pageId": "p2", "name": "Beta", "messages": 30, "sessions": 7},
        {"pageId": "p3", "name": "Gamma", "messages": 20, "sessions": 2, "avgResponseTime": 30},
    ],
    "pageShiftPerformance": [
        {"pageId": "p1", "name": "Alpha", "category": "Hosts", "shift": "Morning", "messages": 30, "incoming": 20, "outgoing": 10, "sessions": 2},
        {"pageId": "p1", "name": "Alpha", "category": "Hosts", "shift": "Mid", "messages": 20, "incoming": 10, "outgoing": 10, "sessions": 1},
        {"pageId": "p2", "name": "Beta", "category": "Babes", "shift": "Evening", "messages": 60, "incoming": 30, "outgoing": 30, "sessions": 5},
        {"pageId": "p3", "name": "Gamma", "category": "Hosts", "shift": "Morning", "messages": 5, "sessions": 1},
    ],
    "allCommenters": [
        {"userId": "u1", "name": "Maria Santos", "commentCount": 40, "pagesCommented": 3},
        {"userId": "u2", "name": "Jose Rizal", "commentCount": 25, "pagesCommented": 1},
        {"userId": "u3", "name": "Mariano Ponce", "commentCount": 10, "pagesCommented": 2},
    ],
    "topCommenters": [
        {"userId": "u1", "name": "Maria Santos", "commentCount": 40},
        {"userId": "u2", "name": "Jose Rizal", "commentCount": 25},
    ],
    "userComments": {
        "u1": [{"message": f"comment {i}", "pageName": "Alpha"} for i in range(30)],
    },
    "lastSync": "2024-01-03T12:00:00Z",
}


@pytest.fixture
def document():
    return AnalyticsDocument.model_validate(SAMPLE_DOCUMENT)


@pytest.fixture
def store():
    return WatchlistStore(MemoryBackend())


@pytest.fixture
def client(document, store):
    app.dependency_overrides[get_document] = lambda: document
    app.dependency_overrides[get_watchlist_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def empty_client(store):
    app.dependency_overrides[get_document] = lambda: None
    app.dependency_overrides[get_watchlist_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
