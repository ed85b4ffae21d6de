"""
Integration tests for SSE notification streaming.

Tests against a running Dashboard API:
1. The stream endpoint speaks text/event-stream
2. History and stats endpoints answer in the shape the frontend expects
3. Notifications already in history are replayed on connect

Requires Dashboard API running on port 8082.

Usage:
    # Start the Dashboard API first:
    python -m uvicorn server.dashboard_api.main:app --port 8082

    # Run this test:
    pytest tests/test_sse_integration.py -v
"""
import json

import httpx
import pytest


# Dashboard API URL
API_BASE = "http://localhost:8082"


def is_api_running() -> bool:
    """Check if Dashboard API is running."""
    try:
        response = httpx.get(f"{API_BASE}/health", timeout=2.0)
        return response.status_code == 200
    except (httpx.ConnectError, httpx.ReadTimeout):
        return False


requires_api = pytest.mark.skipif(not is_api_running(), reason="Dashboard API not running on port 8082")


@pytest.fixture(scope="module")
def api_client():
    """Create HTTP client for API requests."""
    with httpx.Client(base_url=API_BASE, timeout=10.0) as client:
        yield client


@requires_api
class TestSSENotificationFlow:
    """Test SSE notification streaming functionality."""

    def test_stream_content_type(self, api_client):
        """The stream endpoint answers with an event stream."""
        with api_client.stream(
            "GET", "/api/notifications/stream", params={"include_history": False}
        ) as response:
            assert response.status_code == 200
            assert response.headers["content-type"].startswith("text/event-stream")
            assert response.headers["cache-control"] == "no-cache"

    def test_history_and_stats(self, api_client):
        """History is a list and stats expose the publish counters."""
        history = api_client.get("/api/notifications", params={"count": 5})
        stats = api_client.get("/api/notifications/stats")

        assert history.status_code == 200
        assert isinstance(history.json(), list)
        assert "total_published" in stats.json()
        assert "current_subscribers" in stats.json()

    def test_history_replayed_on_connect(self, api_client):
        """When history exists, the first SSE event is the newest replayed notification."""
        history = api_client.get("/api/notifications", params={"count": 1}).json()
        if not history:
            pytest.skip("No notifications published yet")

        with api_client.stream(
            "GET", "/api/notifications/stream", params={"history_count": 1}
        ) as response:
            lines = response.iter_lines()
            assert next(lines) == "event: notification"
            data = json.loads(next(lines)[len("data: "):])

        assert data["id"] == history[0]["id"]
