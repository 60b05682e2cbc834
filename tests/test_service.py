"""
Gateway router tests
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from i18n_client import service
from i18n_client.service import get_i18n_client, router


@pytest.fixture
def client_and_transport(make_client, transport):
    return make_client(default_source_language="en", default_target_language="es"), transport


@pytest.fixture
def http(client_and_transport):
    i18n, _ = client_and_transport
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_i18n_client] = lambda: i18n
    return TestClient(app)


class TestGatewayTranslate:
    """POST /translate and /translate/batch"""

    def test_translate_then_cached(self, http, client_and_transport):
        _, transport = client_and_transport
        transport.translations["Hello"] = "Hola"

        first = http.post("/api/i18n/v1/translate", json={"text": "Hello"})
        second = http.post("/api/i18n/v1/translate", json={"text": "Hello"})

        assert first.status_code == 200
        assert first.json() == {"text": "Hola", "translated": True}
        assert second.json() == {"text": "Hola", "translated": True, "fromCache": True}
        assert len(transport.translate_calls) == 1

    def test_translate_failure_is_200_with_error(self, http, client_and_transport):
        _, transport = client_and_transport
        transport.translate_error = RuntimeError("upstream down")

        response = http.post(
            "/api/i18n/v1/translate",
            json={"text": "Hello", "targetLanguage": "de", "preserveFormatting": False},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "Hello", "translated": False, "error": "upstream down"}
        assert transport.translate_calls[0]["preserve_formatting"] is False

    def test_batch(self, http, client_and_transport):
        _, transport = client_and_transport

        response = http.post("/api/i18n/v1/translate/batch", json={
            "items": [{"id": "a", "text": "one"}, {"id": "b", "text": "two", "targetLanguage": "fr"}],
        })

        assert response.status_code == 200
        assert response.json() == {"results": [
            {"id": "a", "text": "[es] one", "translated": True},
            {"id": "b", "text": "[fr] two", "translated": True},
        ]}

    def test_batch_async_job(self, http, client_and_transport):
        _, transport = client_and_transport
        transport.batch_response = {"jobId": "job-9"}

        response = http.post("/api/i18n/v1/translate/batch", json={
            "items": [{"text": "one"}],
            "async": True,
        })

        assert response.json() == {"jobId": "job-9", "status": "processing"}
        assert transport.batch_calls[0]["async_job"] is True


class TestGatewayOther:
    """Status, languages, cache and config endpoints"""

    def test_job_status(self, http, client_and_transport):
        _, transport = client_and_transport
        transport.status_response = {"jobId": "job-9", "status": "completed", "progress": 100}

        response = http.get("/api/i18n/v1/translate/status/job-9")

        assert response.json() == {"jobId": "job-9", "status": "completed", "progress": 100.0}
        assert transport.status_calls == ["job-9"]

    def test_languages(self, http):
        response = http.get("/api/i18n/v1/languages")

        assert response.status_code == 200
        assert response.json()[1] == {
            "code": "es", "name": "Spanish", "nativeName": "Español", "flag": "🇪🇸",
        }

    def test_clear_cache(self, http, storage):
        http.post("/api/i18n/v1/translate", json={"text": "Hello"})
        http.post("/api/i18n/v1/translate", json={"text": "Hello", "targetLanguage": "de"})

        response = http.delete("/api/i18n/v1/cache", params={"target_language": "es"})

        assert response.json() == {"removed": 1, "targetLanguage": "es"}
        assert list(storage) == ["i18n_en:de:42628b2"]

    def test_config_masks_key(self, http):
        body = http.get("/api/i18n/v1/config").json()

        assert body["api_key"] == "***"
        assert body["default_target_language"] == "es"


class TestGatewayRequestId:
    """Per-request ID binding"""

    def test_caller_request_id_propagates(self, http, client_and_transport):
        _, transport = client_and_transport

        response = http.post(
            "/api/i18n/v1/translate",
            json={"text": "Hello"},
            headers={"X-Request-ID": "req-7"},
        )

        assert response.headers["x-request-id"] == "req-7"
        assert transport.request_ids == ["req-7"]

    def test_request_id_generated_when_missing(self, http, client_and_transport):
        _, transport = client_and_transport

        first = http.post("/api/i18n/v1/translate", json={"text": "one"})
        second = http.post("/api/i18n/v1/translate", json={"text": "two"})

        first_id = first.headers["x-request-id"]
        assert len(first_id) == 32
        assert first_id != second.headers["x-request-id"]
        assert transport.request_ids == [first_id, second.headers["x-request-id"]]


class TestSharedClient:
    """Module-level client management"""

    def test_init_and_close(self, make_client, transport):
        import asyncio

        custom = make_client()
        assert service.init_i18n_client(custom) is custom
        assert get_i18n_client() is custom

        asyncio.run(service.close_i18n_client())

        assert transport.closed is True
        assert service._client is None
