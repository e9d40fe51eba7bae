"""
Tests for the HTTP surface over the appointment lifecycle.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.infrastructure.store.memory_store import MemoryAppointmentRepository, MemoryLedgerRepository
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.main import app
from app.wiring.dependencies import build_container, set_container


@pytest.fixture
def platform() -> MockWhatsAppPlatform:
    return MockWhatsAppPlatform()


@pytest.fixture
def container(platform):
    config = Settings(ENV="test", WHATSAPP_API_URL=None, WHATSAPP_API_KEY=None)
    built = build_container(
        config,
        platform=platform,
        appointments=MemoryAppointmentRepository(),
        ledger=MemoryLedgerRepository(),
    )
    set_container(built)
    yield built
    set_container(None)


@pytest.fixture
def client(container):
    with TestClient(app) as test_client:
        yield test_client


def _create(client: TestClient, **overrides) -> dict:
    payload = {
        "date": "2025-04-10",
        "time": "14:15",
        "client_name": "Ana",
        "client_phone": "(11) 99999-9999",
        "service_kind": "combo",
    }
    payload.update(overrides)
    resp = client.post("/appointments", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_get(client):
    created = _create(client)

    assert created["price"] == 45
    assert created["duration_minutes"] == 60
    assert created["status"] == "pending"
    assert created["client_contact"] == "(11) 99999-9999"

    fetched = client.get(f"/appointments/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == created["id"]


def test_create_validation_errors(client):
    missing = client.post("/appointments", json={"date": "2025-04-10", "time": "14:15"})
    assert missing.status_code == 400
    assert "client_name" in missing.json()["detail"]

    unknown = client.post(
        "/appointments",
        json={
            "date": "2025-04-10",
            "time": "14:15",
            "client_name": "Ana",
            "client_phone": "1",
            "service_kind": "nails",
        },
    )
    assert unknown.status_code == 400


def test_list_is_ordered_and_filterable(client):
    late = _create(client, date="2025-03-02", time="09:00")
    evening = _create(client, date="2025-03-01", time="17:15")
    early = _create(client, date="2025-03-01", time="09:00")
    client.post(f"/appointments/{late['id']}/status", json={"status": "confirmed"})

    listed = client.get("/appointments").json()
    assert [a["id"] for a in listed] == [early["id"], evening["id"], late["id"]]

    confirmed = client.get("/appointments", params={"status": "confirmed"}).json()
    assert [a["id"] for a in confirmed] == [late["id"]]


def test_status_flow_updates_ledger_and_revenue(client, container, platform):
    created = _create(client)

    confirmed = client.post(f"/appointments/{created['id']}/status", json={"status": "confirmed"})
    assert confirmed.status_code == 200
    assert client.get("/revenue").json()["all_time"] == 45
    assert [e["appointment_id"] for e in client.get("/ledger").json()] == [created["id"]]

    cancelled = client.post(f"/appointments/{created['id']}/status", json={"status": "cancelled"})
    assert cancelled.status_code == 200
    assert client.get("/revenue").json()["all_time"] == 0
    assert client.get("/ledger").json() == []

    again = client.post(f"/appointments/{created['id']}/status", json={"status": "confirmed"})
    assert again.status_code == 409

    container.dispatcher.join()
    assert len(platform.sent) == 2


def test_status_unknown_id(client):
    resp = client.post("/appointments/missing/status", json={"status": "confirmed"})
    assert resp.status_code == 404


def test_reschedule(client, container, platform):
    created = _create(client)
    client.post(f"/appointments/{created['id']}/status", json={"status": "confirmed"})

    resp = client.put(f"/appointments/{created['id']}/schedule", json={"date": "2025-04-11", "time": "09:45"})
    assert resp.status_code == 200
    assert resp.json()["time"] == "09:45"

    bad = client.put(f"/appointments/{created['id']}/schedule", json={"date": "2025-04-11", "time": "09:50"})
    assert bad.status_code == 400

    container.dispatcher.join()
    assert [text.startswith("🔄") for _, text in platform.sent] == [False, True]


def test_patch_client_fields(client):
    created = _create(client)

    resp = client.patch(f"/appointments/{created['id']}", json={"client_name": "Ana Paula", "status": "confirmed"})

    assert resp.status_code == 200
    assert resp.json()["client_name"] == "Ana Paula"
    assert resp.json()["status"] == "pending"


def test_delete(client):
    created = _create(client)

    assert client.delete(f"/appointments/{created['id']}").json() == {"success": True}
    assert client.delete(f"/appointments/{created['id']}").status_code == 404
    assert client.get("/ledger").json() == []


def test_manual_reminder(client, container, platform):
    created = _create(client)

    resp = client.post(f"/appointments/{created['id']}/notifications", json={"kind": "reminder"})
    assert resp.status_code == 202

    container.dispatcher.join()
    assert platform.sent[0][1].startswith("⏰")


def test_catalog(client):
    services = {s["service_kind"]: s for s in client.get("/catalog").json()}
    assert services["combo"]["price"] == 45
    assert services["beard"]["duration_minutes"] == 20


class _ClosingPlatform(MockWhatsAppPlatform):
    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    def close(self) -> None:
        self.closed = True


def test_shutdown_closes_message_platform():
    platform = _ClosingPlatform()
    config = Settings(ENV="test", WHATSAPP_API_URL=None, WHATSAPP_API_KEY=None)
    container = build_container(
        config,
        platform=platform,
        appointments=MemoryAppointmentRepository(),
        ledger=MemoryLedgerRepository(),
    )
    set_container(container)
    try:
        with TestClient(app) as test_client:
            assert test_client.get("/health").status_code == 200
            assert platform.closed is False
        assert platform.closed is True
        assert container.dispatcher.running is False
    finally:
        set_container(None)
