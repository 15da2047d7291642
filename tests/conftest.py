"""
Pytest configuration and fixtures
"""

from unittest.mock import AsyncMock

import pytest

from bugsink_mcp.models.config import BugsinkConfig
from bugsink_mcp.services.bugsink_client import BugsinkClient


@pytest.fixture
def mock_bugsink_config():
    """BugsinkConfig pointing at a fake instance"""
    return BugsinkConfig(
        url="https://bugsink.example.com/",
        token="test_token",
    )


@pytest.fixture
def mock_client():
    """BugsinkClient with every API coroutine mocked"""
    return AsyncMock(spec=BugsinkClient)


@pytest.fixture
def mock_project_data():
    return {
        "id": 1,
        "team": "2f1c9a52-8e0e-4c3b-9d6a-1b0a5f6e7c11",
        "name": "Backend",
        "slug": "backend",
        "dsn": "https://key@bugsink.example.com/1",
        "digested_event_count": 120,
        "stored_event_count": 100,
        "alert_on_new_issue": True,
        "alert_on_regression": False,
        "alert_on_unmute": True,
        "visibility": "team_members",
        "retention_max_event_count": 10000,
    }


@pytest.fixture
def mock_issue_data():
    return {
        "id": "7d3e1c0a-5b2f-4f4e-8a77-2c9d1e6f0b33",
        "project": 1,
        "digest_order": 42,
        "first_seen": "2024-06-18T10:00:00.000000Z",
        "last_seen": "2024-06-18T15:30:00.000000Z",
        "digested_event_count": 150,
        "stored_event_count": 150,
        "calculated_type": "DatabaseConnectionError",
        "calculated_value": "could not connect to server",
        "transaction": "/api/orders",
        "is_resolved": False,
        "is_resolved_by_next_release": False,
        "is_muted": False,
    }


@pytest.fixture
def mock_event_data():
    """An event as returned by the detail endpoint, frames in source order"""
    return {
        "id": "b1e2c3d4-0000-4000-8000-000000000001",
        "event_id": "0f9e8d7c6b5a49382716a5b4c3d2e1f0",
        "issue": "7d3e1c0a-5b2f-4f4e-8a77-2c9d1e6f0b33",
        "project": 1,
        "timestamp": "2024-06-18T15:30:00Z",
        "ingested_at": "2024-06-18T15:30:01Z",
        "digested_at": "2024-06-18T15:30:02Z",
        "digest_order": 7,
        "grouping": 3,
        "data": {
            "level": "error",
            "platform": "python",
            "exception": {
                "values": [
                    {
                        "type": "DatabaseConnectionError",
                        "value": "could not connect to server",
                        "stacktrace": {
                            "frames": [
                                {
                                    "filename": "app/main.py",
                                    "function": "handle",
                                    "lineno": 10,
                                },
                                {
                                    "filename": "app/orders.py",
                                    "function": "load",
                                    "lineno": 20,
                                    "colno": 4,
                                },
                                {
                                    "filename": "app/db.py",
                                    "function": "connect",
                                    "lineno": 30,
                                    "context_line": "    conn = pool.get()  ",
                                },
                            ]
                        },
                    }
                ]
            },
            "request": {"url": "https://shop.example.com/api/orders"},
            "tags": {"environment": "production"},
            "contexts": {"runtime": {"name": "CPython", "version": "3.12.1"}},
        },
    }


@pytest.fixture
def mock_release_data():
    return {
        "id": "c0ffee00-1111-4222-8333-444455556666",
        "project": 1,
        "version": "1.2.0",
        "date_released": "2024-06-18T09:00:00Z",
        "semver": "1.2.0",
        "is_semver": True,
    }


@pytest.fixture
def make_page():
    """Wrap results the way Bugsink list endpoints do"""

    def _make_page(*results):
        return {"next": None, "previous": None, "results": list(results)}

    return _make_page
