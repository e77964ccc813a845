"""
Tests for the HTTP API.

Each test gets a fresh SynthesisService injected through
app.dependency_overrides, so counters start at zero.
"""
import base64
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient

from naijavoice.api.dependencies import get_synthesis_service
from naijavoice.core.config import Settings
from naijavoice.main import create_app
from naijavoice.services.synthesis_service import SynthesisService
from naijavoice.tts.engine import BaseSynthesisEngine


class ExplodingEngine(BaseSynthesisEngine):
    name = "exploding"

    def synthesize(self, text, voice, speed=1.0):
        raise RuntimeError("secret engine detail")


@pytest.fixture
def service():
    return SynthesisService(Settings(raw={}))


@pytest.fixture
def client(service):
    app = create_app()
    app.dependency_overrides[get_synthesis_service] = lambda: service
    with TestClient(app) as c:
        yield c


class TestVoicesEndpoint:

    def test_list_voices(self, client):
        r = client.get("/api/voices")
        assert r.status_code == 200
        voices = r.json()["voices"]
        assert [v["id"] for v in voices] == ["lagos-female", "lagos-male", "pidgin", "yoruba-accent"]
        assert voices[0] == {
            "id": "lagos-female",
            "name": "Lagos Female",
            "description": "Professional Lagos female voice",
            "available": True,
        }


class TestSynthesizeEndpoint:

    def test_happy_path(self, client):
        r = client.post("/api/synthesize", json={"text": "Hello Lagos", "voice": "lagos-female"})
        assert r.status_code == 200
        j = r.json()
        assert j["success"] is True
        assert j["status"] == "queued"
        assert j["message"] == "Nigerian voice is being generated..."
        assert j["estimatedDelivery"] == "2-5 minutes"
        assert j["downloadUrl"] == f"/api/download/{j['orderId']}"
        assert "X-Request-Id" in r.headers

        prefix = "data:audio/wav;base64,"
        assert j["audioUrl"].startswith(prefix)
        decoded = base64.b64decode(j["audioUrl"][len(prefix):]).decode("utf-8")
        assert decoded == 'Nigerian TTS Audio: "Hello Lagos" in lagos-female style'

    def test_counters_updated(self, client):
        client.post("/api/synthesize", json={"text": "Hello Lagos", "voice": "lagos-female"})
        j = client.get("/api/analytics").json()
        assert j == {"totalRequests": 1, "totalCharacters": 11, "averageLength": 11.0, "uniqueUsers": 0}

    def test_empty_text(self, client):
        r = client.post("/api/synthesize", json={"text": "", "voice": "lagos-female"})
        assert r.status_code == 400
        assert r.json() == {"ok": False, "error": "No text provided", "code": "EMPTY_INPUT"}
        assert client.get("/api/analytics").json()["totalRequests"] == 0

    def test_missing_text(self, client):
        r = client.post("/api/synthesize", json={})
        assert r.status_code == 400
        assert r.json()["code"] == "EMPTY_INPUT"

    def test_text_too_long(self, client):
        r = client.post("/api/synthesize", json={"text": "a" * 501})
        assert r.status_code == 400
        j = r.json()
        assert j["code"] == "TEXT_TOO_LONG"
        assert "500" in j["error"]
        assert "info@naijavoice.com" in j["error"]
        assert client.get("/api/analytics").json()["totalCharacters"] == 0

    def test_unknown_voice(self, client):
        r = client.post("/api/synthesize", json={"text": "Hello", "voice": "unknown-voice"})
        assert r.status_code == 200
        assert r.json()["voiceName"] == "Lagos Female"
        assert r.json()["voice"] == "unknown-voice"

    def test_wrong_type_is_422(self, client):
        r = client.post("/api/synthesize", json={"text": "Hello", "speed": "fast"})
        assert r.status_code == 422

    def test_engine_failure_hides_details(self):
        svc = SynthesisService(Settings(raw={}), engine=ExplodingEngine())
        app = create_app()
        app.dependency_overrides[get_synthesis_service] = lambda: svc
        with TestClient(app) as c:
            r = c.post("/api/synthesize", json={"text": "Hello"})
        assert r.status_code == 500
        j = r.json()
        assert j["ok"] is False
        assert j["code"] == "INTERNAL_ERROR"
        assert j["error"] == "Internal server error"
        assert "secret" not in r.text
        assert r.headers["x-request-id"] == j["request_id"]
        assert svc.analytics().total_requests == 0
        assert svc.analytics().total_characters == 0
        assert len(svc.orders) == 0

    def test_unencodable_text_rejected(self, client, service):
        r = client.post(
            "/api/synthesize",
            content=b'{"text": "Hi \\ud800"}',
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 400
        assert r.json()["code"] == "INVALID_TEXT"
        assert "x-request-id" in r.headers
        assert client.get("/api/analytics").json()["totalRequests"] == 0
        assert len(service.orders) == 0


class TestOrderEndpoints:

    def test_order_status(self, client):
        order_id = client.post("/api/synthesize", json={"text": "Hello Lagos", "voice": "pidgin"}).json()["orderId"]
        r = client.get(f"/api/order/{order_id}")
        assert r.status_code == 200
        j = r.json()
        assert j["id"] == order_id
        assert j["status"] == "queued"
        assert j["voice"] == "pidgin"
        assert j["estimatedMinutes"] == 1
        assert j["downloadUrl"] == f"/api/download/{order_id}"
        assert "createdAt" in j

    def test_unknown_order(self, client):
        r = client.get("/api/order/12345")
        assert r.status_code == 404
        assert r.json()["code"] == "NOT_FOUND"

    def test_non_numeric_order_id(self, client):
        r = client.get("/api/order/abc")
        assert r.status_code == 404
        j = r.json()
        assert j["ok"] is False
        assert j["error"] == "Order abc not found"
        assert j["code"] == "NOT_FOUND"

    def test_download_non_numeric_order_id(self, client):
        r = client.get("/api/download/abc", follow_redirects=False)
        assert r.status_code == 404
        assert r.json()["code"] == "NOT_FOUND"

    def test_download_redirects_to_mailto(self, client):
        r = client.get("/api/download/12345", follow_redirects=False)
        assert r.status_code == 302
        location = r.headers["location"]
        assert location.startswith("mailto:info@naijavoice.com")
        assert "order 12345" in unquote(location)


class TestMiscEndpoints:

    def test_health(self, client):
        r = client.get("/api/health")
        assert r.status_code == 200
        j = r.json()
        assert j["status"] == "healthy"
        assert j["voicesAvailable"] == 4
        assert j["totalRequests"] == 0

    def test_demo_sample(self, client):
        r = client.post("/api/demo-sample", json={"voice": "pidgin"})
        assert r.status_code == 200
        j = r.json()
        assert j["success"] is True
        assert j["text"].startswith("How you dey?")
        assert j["audioUrl"].startswith("data:audio/wav;base64,")

    def test_demo_sample_without_voice(self, client):
        r = client.post("/api/demo-sample", json={})
        assert r.status_code == 200
        assert r.json()["text"].startswith("Welcome to Lagos!")

    def test_demo_sample_unencodable_voice(self, client):
        r = client.post(
            "/api/demo-sample",
            content=b'{"voice": "\\ud800"}',
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 400
        assert r.json()["code"] == "INVALID_TEXT"

    def test_contact(self, client):
        r = client.post("/api/contact", json={"name": "Ada", "email": "ada@example.com",
                                              "message": "Hi", "orderType": "bulk"})
        assert r.status_code == 200
        assert r.json() == {"success": True, "message": "We will contact you within 24 hours"}

    def test_unknown_path(self, client):
        r = client.get("/api/nope")
        assert r.status_code == 404
        assert r.json() == {"ok": False, "error": "Endpoint not found", "code": "NOT_FOUND"}

    def test_cors_header(self, client):
        r = client.get("/api/voices", headers={"Origin": "http://example.com"})
        assert r.headers.get("access-control-allow-origin") == "*"

    def test_unhandled_error(self):
        class BrokenService(SynthesisService):
            def get_health_info(self):
                raise RuntimeError("boom")

        svc = BrokenService(Settings(raw={}))
        app = create_app()
        app.dependency_overrides[get_synthesis_service] = lambda: svc
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.get("/api/health")
        assert r.status_code == 500
        assert r.json()["ok"] is False
        assert "boom" not in r.text


class TestMetricsEndpoint:

    def test_metrics(self, client):
        client.post("/api/synthesize", json={"text": "Hello"})
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "text/plain" in r.headers["content-type"]
        assert "naijavoice_requests_total" in r.text
        assert "naijavoice_characters_total" in r.text
