from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from app.application.ports.notification_dispatcher import NotificationDispatcherPort
from app.application.use_cases.appointment_store import AppointmentStore
from app.application.use_cases.ledger_projector import LedgerProjector
from app.application.use_cases.lifecycle import AppointmentLifecycle
from app.domain.entities.notification import NotificationIntent
from app.infrastructure.catalog.pricing_catalog import PricingCatalog
from app.infrastructure.store.memory_store import MemoryAppointmentRepository, MemoryLedgerRepository


class RecordingDispatcher(NotificationDispatcherPort):
    def __init__(self) -> None:
        self.intents: list[NotificationIntent] = []

    def enqueue(self, intent: NotificationIntent) -> None:
        self.intents.append(intent)

    @property
    def kinds(self) -> list[str]:
        return [i.kind.value for i in self.intents]


def fixed_clock() -> datetime:
    return datetime(2025, 4, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog() -> PricingCatalog:
    return PricingCatalog()


@pytest.fixture
def appointments() -> MemoryAppointmentRepository:
    return MemoryAppointmentRepository()


@pytest.fixture
def ledger() -> MemoryLedgerRepository:
    return MemoryLedgerRepository()


@pytest.fixture
def projector(ledger) -> LedgerProjector:
    return LedgerProjector(ledger)


@pytest.fixture
def store(appointments, catalog, projector) -> AppointmentStore:
    return AppointmentStore(repository=appointments, catalog=catalog, projector=projector, clock=fixed_clock)


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def lifecycle(store, projector, dispatcher) -> AppointmentLifecycle:
    return AppointmentLifecycle(
        store=store,
        projector=projector,
        dispatcher=dispatcher,
        today=lambda: date(2025, 4, 15),
    )


def _booking(**overrides) -> dict:
    fields = {
        "date": "2025-04-10",
        "time": "14:15",
        "client_name": "Ana",
        "client_phone": "(11) 99999-9999",
        "service_kind": "combo",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def booking():
    """Factory for valid booking fields, with per-test overrides."""
    return _booking
