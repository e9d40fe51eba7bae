"""
Tests for durable appointment and ledger persistence.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest

from app.application.exceptions import CorruptedStoreError
from app.application.use_cases.appointment_store import AppointmentStore
from app.application.use_cases.ledger_projector import LedgerProjector
from app.application.use_cases.lifecycle import AppointmentLifecycle
from app.domain.entities.appointment import AppointmentStatus, ServiceKind
from app.domain.entities.ledger_entry import PaymentStatus
from app.infrastructure.catalog.pricing_catalog import PricingCatalog
from app.infrastructure.store.json_store import JsonAppointmentRepository, JsonLedgerRepository


class _NullDispatcher:
    def enqueue(self, intent) -> None:
        pass


def _build_lifecycle(data_dir: str) -> tuple[AppointmentLifecycle, JsonAppointmentRepository, JsonLedgerRepository]:
    appointments = JsonAppointmentRepository(data_dir=data_dir)
    ledger = JsonLedgerRepository(data_dir=data_dir)
    projector = LedgerProjector(ledger)
    store = AppointmentStore(repository=appointments, catalog=PricingCatalog(), projector=projector)
    lifecycle = AppointmentLifecycle(store=store, projector=projector, dispatcher=_NullDispatcher())
    return lifecycle, appointments, ledger


def _fields(**overrides) -> dict:
    fields = {
        "date": "2025-04-10",
        "time": "14:15",
        "client_name": "Ana",
        "client_phone": "(11) 99999-9999",
        "service_kind": "combo",
    }
    fields.update(overrides)
    return fields


def test_json_store_survives_restart():
    """Appointments and ledger entries are read back by a fresh store instance."""
    with tempfile.TemporaryDirectory() as tmpdir:
        lifecycle, _, _ = _build_lifecycle(tmpdir)
        created = lifecycle.create_appointment(_fields(client_contact="(21) 98888-7777"))
        lifecycle.set_status(created.id, "confirmed")

        restarted, appointments, ledger = _build_lifecycle(tmpdir)
        loaded = restarted.get_appointment(created.id)

        assert loaded.status == AppointmentStatus.confirmed
        assert loaded.service_kind == ServiceKind.combo
        assert loaded.price == 45
        assert loaded.duration_minutes == 60
        assert loaded.date == date(2025, 4, 10)
        assert loaded.client_contact == "(21) 98888-7777"
        assert loaded.created_at == created.created_at

        entry = ledger.get(created.id)
        assert entry is not None
        assert entry.status == PaymentStatus.pending
        assert entry.price == 45


def test_json_store_cancel_and_delete_persist():
    with tempfile.TemporaryDirectory() as tmpdir:
        lifecycle, _, _ = _build_lifecycle(tmpdir)
        cancelled = lifecycle.create_appointment(_fields(time="09:00"))
        deleted = lifecycle.create_appointment(_fields(time="09:45"))
        kept = lifecycle.create_appointment(_fields(time="10:30"))
        lifecycle.set_status(cancelled.id, "cancelled")
        lifecycle.delete_appointment(deleted.id)

        restarted, _, ledger = _build_lifecycle(tmpdir)

        assert [a.id for a in restarted.list_appointments()] == [cancelled.id, kept.id]
        assert {e.appointment_id for e in ledger.all()} == {kept.id}


def test_json_store_keeps_insertion_order_for_ties():
    with tempfile.TemporaryDirectory() as tmpdir:
        lifecycle, _, _ = _build_lifecycle(tmpdir)
        first = lifecycle.create_appointment(_fields(client_name="First"))
        second = lifecycle.create_appointment(_fields(client_name="Second"))

        restarted, _, _ = _build_lifecycle(tmpdir)
        assert [a.id for a in restarted.list_appointments()] == [first.id, second.id]


def test_json_store_corrupted_file_is_never_overwritten():
    """A later write must not replace an unreadable file with an empty collection."""
    with tempfile.TemporaryDirectory() as tmpdir:
        lifecycle, _, ledger = _build_lifecycle(tmpdir)
        first = lifecycle.create_appointment(_fields(time="09:00"))
        second = lifecycle.create_appointment(_fields(time="09:45"))

        path = Path(tmpdir, "appointments.json")
        truncated = path.read_text(encoding="utf-8")[:40]
        path.write_text(truncated, encoding="utf-8")

        with pytest.raises(CorruptedStoreError):
            lifecycle.create_appointment(_fields(time="10:30"))
        with pytest.raises(CorruptedStoreError):
            lifecycle.list_appointments()

        assert path.read_text(encoding="utf-8") == truncated
        assert {e.appointment_id for e in ledger.all()} == {first.id, second.id}


def test_json_store_rejects_unexpected_layout():
    with tempfile.TemporaryDirectory() as tmpdir:
        Path(tmpdir, "ledger.json").write_text("[1, 2, 3]", encoding="utf-8")
        ledger = JsonLedgerRepository(data_dir=tmpdir)

        with pytest.raises(CorruptedStoreError):
            ledger.remove("anything")
        assert Path(tmpdir, "ledger.json").read_text(encoding="utf-8") == "[1, 2, 3]"


def test_json_store_modify_missing_returns_none():
    with tempfile.TemporaryDirectory() as tmpdir:
        appointments = JsonAppointmentRepository(data_dir=tmpdir)
        assert appointments.modify("missing", lambda a: a) is None
        assert appointments.remove("missing") is False


if __name__ == "__main__":
    test_json_store_survives_restart()
    test_json_store_cancel_and_delete_persist()
    test_json_store_keeps_insertion_order_for_ties()
    test_json_store_corrupted_file_is_never_overwritten()
    test_json_store_rejects_unexpected_layout()
    test_json_store_modify_missing_returns_none()
    print("All tests passed!")
