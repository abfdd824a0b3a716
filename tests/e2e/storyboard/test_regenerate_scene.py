"""
E2E tests for POST/GET /api/regenerate-scene
"""

from src.services.storyboard.errors import MalformedResponseError
from tests.e2e.e2e_test_base import E2ETestBase

CURRENT_SCENE = {
    "scene": 2,
    "duration": "5s",
    "visual": "Creator walking in the city",
    "script": "These are so comfy",
}


class TestRegenerateScene(E2ETestBase):
    def request_body(self, **overrides) -> dict:
        body = {
            "sceneNumber": 2,
            "currentScene": CURRENT_SCENE,
            "structuredBrief": self.sample_structured_brief(),
            "feedback": "Make it more energetic",
        }
        body.update(overrides)
        return body

    def test_regenerates_scene(self):
        response = self.client.post("/api/regenerate-scene", json=self.request_body())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Scene 2 regenerated"
        scene = body["data"]["scene"]
        assert scene["scene"] == 2
        assert scene["script"] == "Updated per feedback: Make it more energetic"

        (number, current, brief, style, feedback), = self.generation_client.called(
            "regenerate_scene"
        )
        assert number == 2
        assert current.visual == CURRENT_SCENE["visual"]
        assert brief.product_name == "Air Max 2024"
        assert style.content_format == "talking head vlog"
        assert feedback == "Make it more energetic"

    def test_missing_feedback_is_400(self):
        body = self.request_body()
        del body["feedback"]

        response = self.client.post("/api/regenerate-scene", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

    def test_scene_number_must_be_positive(self):
        response = self.client.post(
            "/api/regenerate-scene", json=self.request_body(sceneNumber=0)
        )
        assert response.status_code == 400

    def test_brief_without_brand_is_400(self):
        response = self.client.post(
            "/api/regenerate-scene",
            json=self.request_body(structuredBrief={"productName": "Air Max"}),
        )
        assert response.status_code == 400
        assert self.generation_client.calls == []

    def test_mistyped_platform_specs_is_400(self):
        brief = self.sample_structured_brief()
        brief["platformSpecs"] = {"platform": 5}

        response = self.client.post(
            "/api/regenerate-scene", json=self.request_body(structuredBrief=brief)
        )

        assert response.status_code == 400
        assert "platform" in response.json()["error"]
        assert self.generation_client.calls == []

    def test_malformed_reply_is_422(self):
        self.generation_client.error = MalformedResponseError(
            "Scene 2 is missing required field: script"
        )

        response = self.client.post("/api/regenerate-scene", json=self.request_body())

        assert response.status_code == 422

    def test_contract(self):
        contract = self.client.get("/api/regenerate-scene").json()
        assert "feedback" in contract["requiredFields"]
