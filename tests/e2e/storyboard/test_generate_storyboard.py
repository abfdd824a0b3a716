"""
E2E tests for POST/GET /api/generate-storyboard
"""

from datetime import datetime

from src.services.storyboard.errors import (
    AuthenticationError,
    ConnectivityError,
    MalformedResponseError,
    RateLimitError,
)
from src.services.storyboard.models import Scene
from tests.e2e.e2e_test_base import E2ETestBase


class TestGenerateStoryboard(E2ETestBase):
    def test_generates_storyboard_with_metadata(self):
        self.generation_client.storyboard = [
            Scene(scene=1, duration="3s", visual="Hook", script="Hey!"),
            Scene(scene=2, duration="5s", visual="Demo", script="Look at this"),
            Scene(scene=3, duration="4s", visual="CTA", script="Link in bio #Nike"),
        ]

        response = self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": self.sample_structured_brief()},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Generated 3 scenes"

        data = body["data"]
        assert [scene["scene"] for scene in data["storyboard"]] == [1, 2, 3]
        metadata = data["metadata"]
        assert metadata["sceneCount"] == 3
        assert metadata["totalDuration"] == "12s"
        assert metadata["brandName"] == "Nike"
        assert metadata["productName"] == "Air Max 2024"
        datetime.fromisoformat(metadata["generatedAt"])

    def test_default_creator_style_when_absent(self):
        self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": self.sample_structured_brief()},
        )

        (brief, style), = self.generation_client.called("generate_storyboard")
        assert brief.brand_name == "Nike"
        assert style.content_format == "talking head vlog"
        assert style.aesthetic_tags == ["modern", "clean", "relatable"]

    def test_creator_style_is_passed_through(self):
        self.client.post(
            "/api/generate-storyboard",
            json={
                "structuredBrief": self.sample_structured_brief(),
                "creatorStyle": {
                    "contentFormat": "day in the life",
                    "tone": "calm",
                    "aestheticTags": ["film grain"],
                },
            },
        )

        (_, style), = self.generation_client.called("generate_storyboard")
        assert style.content_format == "day in the life"
        assert style.aesthetic_tags == ["film grain"]

    def test_extra_scene_fields_survive(self):
        self.generation_client.storyboard = [
            Scene(scene=1, duration="5s", visual="Hook", script="Hi", camera="handheld"),
        ]

        response = self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": self.sample_structured_brief()},
        )

        assert response.json()["data"]["storyboard"][0]["camera"] == "handheld"

    def test_missing_structured_brief(self):
        response = self.client.post("/api/generate-storyboard", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing structuredBrief field"

    def test_brief_without_product(self):
        response = self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": {"brandName": "Nike"}},
        )
        assert response.status_code == 400
        assert (
            response.json()["error"]
            == "Structured data must include brandName and productName"
        )
        assert self.generation_client.calls == []

    def test_snake_case_brief_is_accepted(self):
        response = self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": {"brand_name": "Nike", "product_name": "Air Max 2024"}},
        )

        assert response.status_code == 200
        (brief, _), = self.generation_client.called("generate_storyboard")
        assert brief.product_name == "Air Max 2024"

    def test_mistyped_platform_specs_is_400(self):
        brief = self.sample_structured_brief()
        brief["platformSpecs"] = {"platform": 5}

        response = self.client.post("/api/generate-storyboard", json={"structuredBrief": brief})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/json")
        assert "platform" in response.json()["error"]
        assert self.generation_client.calls == []

    def test_missing_credentials_is_401(self):
        self.use_unconfigured_client()

        response = self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": self.sample_structured_brief()},
        )

        assert response.status_code == 401
        assert "MINIMAX_API_KEY" in response.json()["error"]

    def test_provider_errors_map_to_status(self):
        cases = [
            (AuthenticationError("Invalid MiniMax API key"), 401),
            (RateLimitError("MiniMax rate limit exceeded"), 429),
            (ConnectivityError("Failed to connect to MiniMax API"), 503),
            (MalformedResponseError("Scene 2 is missing required field: script"), 422),
        ]
        for error, expected_status in cases:
            self.generation_client.error = error
            response = self.client.post(
                "/api/generate-storyboard",
                json={"structuredBrief": self.sample_structured_brief()},
            )
            assert response.status_code == expected_status, error
            assert response.json()["error"] == error.message

    def test_unexpected_error_is_500(self):
        self.generation_client.error = KeyError("choices")

        response = self.client.post(
            "/api/generate-storyboard",
            json={"structuredBrief": self.sample_structured_brief()},
        )

        assert response.status_code == 500
        assert "error" in response.json()

    def test_contract(self):
        contract = self.client.get("/api/generate-storyboard").json()
        assert contract["requiredFields"] == ["structuredBrief"]
        assert contract["optionalFields"] == ["creatorStyle"]
        assert contract["example"]["structuredBrief"]["brandName"] == "Nike"
