"""
E2E tests for ping endpoint
"""

import pytest
from datetime import datetime
from tests.e2e.e2e_test_base import E2ETestBase


class TestPing(E2ETestBase):
    """Tests for the ping endpoint"""

    def test_ping_endpoint_returns_pong(self):
        """Test that ping endpoint returns expected pong response"""
        response = self.client.get("/ping")

        assert response.status_code == 200
        data = response.json()

        assert data["message"] == "pong"
        assert data["status"] == "ok"
        assert data["service"] == "storyboard-studio"
        assert isinstance(data["mock_mode"], bool)

    def test_ping_endpoint_timestamp_format(self):
        """Test that ping endpoint returns valid ISO format timestamp"""
        response = self.client.get("/ping")

        assert response.status_code == 200
        timestamp_str = response.json()["timestamp"]
        try:
            parsed_timestamp = datetime.fromisoformat(timestamp_str)
            assert parsed_timestamp is not None
        except ValueError:
            pytest.fail(f"Timestamp '{timestamp_str}' is not valid ISO format")

    def test_ping_is_not_under_api_prefix(self):
        assert self.client.get("/api/ping").status_code == 404

    def test_request_id_header_is_set(self):
        response = self.client.get("/ping")
        assert response.headers.get("X-Request-ID")

    def test_request_id_header_is_echoed(self):
        response = self.client.get("/ping", headers={"X-Request-ID": "calm-blue-otter"})
        assert response.headers["X-Request-ID"] == "calm-blue-otter"
