"""API tests for POST /api/v1/generate."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from core.config import Settings, get_settings
from main import app
from services.generation.exceptions import GeneratorUnavailable


FIVE = json.dumps({"morning_copies": ["a", "b", "c", "d", "e"]})
COPIES = '```json\n{"copies": ["x", "y", "z"], "quote_index": 2}\n```'


class TestMorning:
    def test_batch_success(self, client: TestClient, override_generator) -> None:
        generator = override_generator([FIVE])

        response = client.post(
            "/api/v1/generate", json={"type": "morning", "dates": ["2024-01-15", "2024-01-16"]}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["type"] == "morning"
        assert [item["date"] for item in body["data"]] == ["2024-01-15", "2024-01-16"]
        first = body["data"][0]
        assert first["content"]["morning_copies"] == ["a", "b", "c", "d", "e"]
        assert first["context"]["formatted_date"] == "2024年1月15日"
        assert "solar_term" not in first["context"]
        assert len(first["image_options"]) == 5
        assert first["used_fallback"] is False
        assert "content" not in body
        assert generator.calls == 2

    def test_type_defaults_to_morning(self, client: TestClient, override_generator) -> None:
        override_generator([FIVE])

        response = client.post("/api/v1/generate", json={"dates": ["2024-01-15"]})

        assert response.status_code == 200
        assert response.json()["type"] == "morning"

    def test_one_failed_date_is_omitted(self, client: TestClient, override_generator) -> None:
        override_generator([FIVE, GeneratorUnavailable("reset"), FIVE])

        response = client.post(
            "/api/v1/generate",
            json={"dates": ["2024-01-01", "2024-01-02", "2024-01-03"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [item["date"] for item in body["data"]] == ["2024-01-01", "2024-01-03"]

    def test_all_dates_failing_is_500(self, client: TestClient, override_generator) -> None:
        override_generator([GeneratorUnavailable("down")])

        response = client.post("/api/v1/generate", json={"dates": ["2024-01-01"]})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "all_items_failed"
        assert body["error"]

    @pytest.mark.parametrize("payload", [{"type": "morning"}, {"dates": []}])
    def test_missing_dates_is_400(
        self, client: TestClient, override_generator, payload: dict
    ) -> None:
        generator = override_generator([FIVE])

        response = client.post("/api/v1/generate", json=payload)

        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_request"
        assert generator.calls == 0


class TestCopies:
    def test_quote_success(self, client: TestClient, override_generator) -> None:
        override_generator([COPIES])

        response = client.post(
            "/api/v1/generate", json={"type": "quote", "subType": "primary", "count": 3}
        )

        assert response.status_code == 200
        body = response.json()
        assert body == {
            "success": True,
            "type": "quote",
            "sub_type": "primary",
            "content": {"copies": ["x", "y", "z"], "quote_index": 2},
        }

    def test_exhausted_retries_is_502(self, client: TestClient, override_generator) -> None:
        generator = override_generator(["no json here"])

        response = client.post("/api/v1/generate", json={"type": "toddler"})

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "exhausted_retries"
        assert generator.calls == 3

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "poem"},
            {"type": "picturebook", "sub_type": "gothic"},
            {"type": "primary", "count": 25},
        ],
    )
    def test_invalid_request_is_400(
        self, client: TestClient, override_generator, payload: dict
    ) -> None:
        generator = override_generator([COPIES])

        response = client.post("/api/v1/generate", json=payload)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert generator.calls == 0

    def test_success_is_recorded_in_history(
        self, client: TestClient, override_generator
    ) -> None:
        override_generator([COPIES])
        client.post("/api/v1/generate", json={"type": "picturebook", "sub_type": "nature"})

        response = client.get("/api/v1/history/latest/picturebook_nature")

        assert response.status_code == 200
        assert response.json()["data"]["data"]["content"]["copies"] == ["x", "y", "z"]


class TestConfiguration:
    def test_missing_key_is_500(self, client: TestClient, override_generator) -> None:
        generator = override_generator([FIVE])
        app.dependency_overrides[get_settings] = lambda: Settings(GEMINI_API_KEY=None)
        try:
            response = client.post("/api/v1/generate", json={"dates": ["2024-01-15"]})
        finally:
            app.dependency_overrides.pop(get_settings, None)

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "generator_not_configured"
        assert generator.calls == 0

    def test_correlation_id_echoed(self, client: TestClient, override_generator) -> None:
        override_generator([FIVE])

        response = client.post(
            "/api/v1/generate",
            json={"type": "poem"},
            headers={"X-Correlation-ID": "console-123"},
        )

        assert response.headers["X-Correlation-ID"] == "console-123"
        assert response.json()["correlation_id"] == "console-123"

    def test_malformed_body_is_422(self, client: TestClient, override_generator) -> None:
        override_generator([FIVE])

        response = client.post("/api/v1/generate", json={"dates": "2024-01-15"})

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "validation_error"


@pytest.mark.asyncio
async def test_generate_over_asgi_transport(async_client, override_generator) -> None:
    override_generator([COPIES])

    response = await async_client.post(
        "/api/v1/generate", json={"type": "primary", "count": 4}
    )

    assert response.status_code == 200
    assert response.json()["content"]["quote_index"] == 2
    assert "X-Correlation-ID" in response.headers
