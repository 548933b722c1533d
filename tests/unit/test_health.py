from __future__ import annotations

from tests.helpers.webhook_payloads import text_payload


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "WhatsApp bot is alive!"
    assert payload["sessions"] == 0
    assert payload["timestamp"]


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["message"] == "WhatsApp bot is running"
    assert payload["activeSessions"] == 0
    assert payload["service"] == "finance_bot"


def test_status_endpoint(client):
    response = client.get("/status")
    assert response.status_code == 200
    payload = response.json()
    assert payload["botStatus"] == "running"
    assert payload["uptime"] >= 0
    assert payload["activeSessions"] == 0


def test_active_sessions_follow_conversations(client):
    client.post("/webhooks/whatsapp", json=text_payload("201001112233", "hi"))
    client.post("/webhooks/whatsapp", json=text_payload("201009998877", "hi"))

    assert client.get("/health").json()["activeSessions"] == 2
    assert client.get("/status").json()["activeSessions"] == 2
    assert client.get("/").json()["sessions"] == 2


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["x-correlation-id"] == "abc-123"
