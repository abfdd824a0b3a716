"""
E2E tests for POST/GET /api/analyze-creator-style
"""

from src.services.storyboard.errors import MalformedResponseError
from tests.e2e.e2e_test_base import E2ETestBase


class TestAnalyzeCreatorStyle(E2ETestBase):
    def test_analyzes_handle(self):
        response = self.client.post(
            "/api/analyze-creator-style", json={"instagramHandle": "calmcreator"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["instagramHandle"] == "@calmcreator"
        style = body["data"]["creatorStyle"]
        assert style["contentFormat"] == "product demo"
        assert style["aestheticTags"] == ["minimal", "studio"]

        (handle,), = self.generation_client.called("analyze_creator_style")
        assert handle == "@calmcreator"

    def test_missing_handle(self):
        response = self.client.post("/api/analyze-creator-style", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing or invalid instagramHandle field"

    def test_blank_handle(self):
        response = self.client.post("/api/analyze-creator-style", json={"instagramHandle": " @ "})
        assert response.status_code == 400
        assert response.json()["error"] == "Instagram handle cannot be empty"
        assert self.generation_client.calls == []

    def test_malformed_reply_is_422(self):
        self.generation_client.error = MalformedResponseError("Creator style must be a JSON object")

        response = self.client.post(
            "/api/analyze-creator-style", json={"instagramHandle": "@calmcreator"}
        )

        assert response.status_code == 422
        assert response.json()["error"] == "Creator style must be a JSON object"

    def test_missing_credentials_is_401(self):
        self.use_unconfigured_client()

        response = self.client.post(
            "/api/analyze-creator-style", json={"instagramHandle": "@calmcreator"}
        )

        assert response.status_code == 401

    def test_contract(self):
        contract = self.client.get("/api/analyze-creator-style").json()
        assert contract["endpoint"] == "/api/analyze-creator-style"
        assert contract["requiredFields"] == ["instagramHandle"]
