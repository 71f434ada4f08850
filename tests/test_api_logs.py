"""Tests for log and report API endpoints.

The repository is replaced with an AsyncMock through dependency overrides,
so these tests only cover request handling and error mapping.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api import logs, reports
from app.api.dependencies import get_feed, get_repository
from app.core.exceptions import LogValidationError, NetworkUnavailableError
from app.services.feed import LogFeed
from app.services.repository import ListLogsResult
from tests.factories import make_log


@pytest.fixture
def repository():
    return AsyncMock()


@pytest.fixture
def feed():
    return LogFeed()


@pytest.fixture
def client(repository, feed):
    """Build a minimal FastAPI app with the log routers and mocked services."""
    app = FastAPI()
    app.include_router(logs.router)
    app.include_router(reports.router)
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_feed] = lambda: feed
    with TestClient(app) as client:
        yield client


class TestListLogs:

    def test_online(self, client, repository, feed):
        repository.list_logs.return_value = ListLogsResult(records=[make_log(1)], is_offline=False)

        resp = client.get("/api/logs")

        assert resp.status_code == 200
        data = resp.json()
        assert data["is_offline"] is False
        assert data["notice"] is None
        assert data["logs"][0]["id"] == 1
        assert data["logs"][0]["type"] == "intake"
        assert [r.id for r in feed.snapshot()] == [1]

    def test_offline_shows_cached_notice(self, client, repository, feed):
        repository.list_logs.return_value = ListLogsResult(records=[make_log(1)], is_offline=True)

        data = client.get("/api/logs").json()

        assert data["is_offline"] is True
        assert data["notice"] == "Showing cached data"
        assert feed.is_offline is True

    def test_offline_without_cache(self, client, repository):
        repository.list_logs.side_effect = NetworkUnavailableError("offline")

        resp = client.get("/api/logs")

        assert resp.status_code == 503
        assert resp.json()["detail"] == "Failed to load logs"


class TestFeed:

    def test_returns_snapshot(self, client, feed):
        feed.replace([make_log(1)], is_offline=True)
        feed.add(make_log(2))

        data = client.get("/api/logs/feed").json()

        assert [log["id"] for log in data["logs"]] == [1, 2]
        assert data["is_offline"] is True


class TestGetLog:

    def test_returns_log(self, client, repository):
        repository.get_log.return_value = make_log(5, category="snack")

        resp = client.get("/api/logs/5")

        assert resp.status_code == 200
        assert resp.json()["category"] == "snack"
        repository.get_log.assert_awaited_once_with(5)

    def test_unavailable(self, client, repository):
        repository.get_log.side_effect = NetworkUnavailableError("offline")

        resp = client.get("/api/logs/5")

        assert resp.status_code == 503
        assert resp.json()["detail"] == "Failed to load log details"


class TestCreateLog:

    def test_created(self, client, repository, feed):
        repository.create_log.return_value = make_log(11)

        resp = client.post("/api/logs", json={
            "date": "2024-01-05", "amount": 500, "type": "intake",
            "category": "lunch", "description": "",
        })

        assert resp.status_code == 201
        assert resp.json()["id"] == 11
        sent = repository.create_log.call_args[0][0]
        assert sent.kind == "intake"
        assert [r.id for r in feed.snapshot()] == [11]

    def test_validation_error(self, client, repository):
        repository.create_log.side_effect = LogValidationError("Please fill required fields (date)")

        resp = client.post("/api/logs", json={"amount": 500, "type": "intake"})

        assert resp.status_code == 422
        assert "date" in resp.json()["detail"]

    def test_offline(self, client, repository, feed):
        repository.create_log.side_effect = NetworkUnavailableError("offline")

        resp = client.post("/api/logs", json={"date": "2024-01-05", "amount": 500, "type": "intake"})

        assert resp.status_code == 503
        assert resp.json()["detail"] == "Failed to create log. Online only."
        assert feed.snapshot() == []


class TestDeleteLog:

    def test_deleted(self, client, repository, feed):
        feed.replace([make_log(1), make_log(2)], is_offline=False)
        repository.delete_log.return_value = make_log(1)

        resp = client.delete("/api/logs/1")

        assert resp.status_code == 200
        assert resp.json()["id"] == 1
        assert [r.id for r in feed.snapshot()] == [2]

    def test_offline_keeps_feed(self, client, repository, feed):
        feed.replace([make_log(1)], is_offline=True)
        repository.delete_log.side_effect = NetworkUnavailableError("offline")

        resp = client.delete("/api/logs/1")

        assert resp.status_code == 503
        assert resp.json()["detail"] == "Failed to delete log. Online only."
        assert [r.id for r in feed.snapshot()] == [1]


class TestReports:

    def test_top_categories(self, client, repository, all_logs):
        repository.list_all_logs.return_value = all_logs

        resp = client.get("/api/reports/top-categories")

        assert resp.status_code == 200
        assert resp.json() == [
            {"category": "lunch", "total_calories": 800},
            {"category": "dinner", "total_calories": 700},
            {"category": "running", "total_calories": 650},
        ]

    def test_monthly(self, client, repository, all_logs):
        repository.list_all_logs.return_value = all_logs

        resp = client.get("/api/reports/monthly")

        assert resp.status_code == 200
        assert [m["month"] for m in resp.json()] == ["2024-01", "2024-02"]

    @pytest.mark.parametrize("path", ["/api/reports/top-categories", "/api/reports/monthly"])
    def test_unavailable_offline(self, client, repository, path):
        repository.list_all_logs.side_effect = NetworkUnavailableError("offline")

        assert client.get(path).status_code == 503
