"""
E2E tests for POST/GET /api/parse-brief
"""

from tests.e2e.e2e_test_base import E2ETestBase

NIKE_BRIEF = (
    "Brand: Nike\n"
    "Product: Air Max 2024\n"
    "Talking points: New cushioning, sustainable materials\n"
    "Hashtags: #Nike #AirMax2024"
)


class TestParseBrief(E2ETestBase):
    def test_parses_free_text_brief(self):
        response = self.client.post("/api/parse-brief", json={"briefText": NIKE_BRIEF})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Brief parsed successfully"

        brief = body["data"]
        assert brief["brandName"] == "Nike"
        assert brief["productName"] == "Air Max 2024"
        assert brief["talkingPoints"] == ["New cushioning", "sustainable materials"]
        assert brief["hashtags"] == ["#Nike", "#AirMax2024"]
        assert brief["duration"] == "15-30 seconds"
        assert brief["platformSpecs"] == {
            "platform": "Instagram",
            "format": "Reel",
            "aspectRatio": "9:16",
        }

    def test_json_string_brief_takes_structured_path(self):
        brief_text = '{"brandName": "Glossier", "productName": "Balm Dotcom"}'
        response = self.client.post("/api/parse-brief", json={"briefText": brief_text})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["brandName"] == "Glossier"
        assert data["productName"] == "Balm Dotcom"
        assert data["talkingPoints"] == []

    def test_missing_brief_text(self):
        response = self.client.post("/api/parse-brief", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing or invalid briefText field"

    def test_non_string_brief_text(self):
        response = self.client.post("/api/parse-brief", json={"briefText": 42})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing or invalid briefText field"

    def test_blank_brief_text(self):
        response = self.client.post("/api/parse-brief", json={"briefText": "   \n  "})
        assert response.status_code == 400
        assert response.json()["error"] == "Brief text cannot be empty"

    def test_brief_without_brand(self):
        response = self.client.post(
            "/api/parse-brief", json={"briefText": "Product: Air Max 2024"}
        )
        assert response.status_code == 400
        assert "brand name" in response.json()["error"]

    def test_mistyped_platform_specs_is_400(self):
        brief_text = '{"brandName": "Nike", "productName": "Air Max", "platformSpecs": {"platform": 5}}'

        response = self.client.post("/api/parse-brief", json={"briefText": brief_text})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid structured brief fields: platform"

    def test_empty_brand_line_does_not_borrow_next_line(self):
        response = self.client.post(
            "/api/parse-brief", json={"briefText": "Brand:\nProduct: Air Max 2024"}
        )
        assert response.status_code == 400
        assert "brand name" in response.json()["error"]

    def test_no_provider_call(self):
        self.client.post("/api/parse-brief", json={"briefText": NIKE_BRIEF})
        assert self.generation_client.calls == []

    def test_contract(self):
        response = self.client.get("/api/parse-brief")

        assert response.status_code == 200
        contract = response.json()
        assert contract["endpoint"] == "/api/parse-brief"
        assert contract["method"] == "POST"
        assert contract["status"] == "ready"
        assert contract["requiredFields"] == ["briefText"]
        assert "supportedFormats" not in contract
