from __future__ import annotations

import threading
from typing import Callable

from app.application.ports.appointment_repository import AppointmentRepositoryPort
from app.application.ports.ledger_repository import LedgerRepositoryPort
from app.domain.entities.appointment import Appointment
from app.domain.entities.ledger_entry import LedgerEntry


class MemoryAppointmentRepository(AppointmentRepositoryPort):
    def __init__(self) -> None:
        # dicts keep insertion order, which list() relies on for ties
        self._appointments: dict[str, Appointment] = {}
        self._lock = threading.Lock()

    def add(self, appointment: Appointment) -> None:
        with self._lock:
            self._appointments[appointment.id] = appointment

    def get(self, appointment_id: str) -> Appointment | None:
        return self._appointments.get(appointment_id)

    def modify(
        self,
        appointment_id: str,
        mutate: Callable[[Appointment], Appointment],
    ) -> tuple[Appointment, Appointment] | None:
        with self._lock:
            before = self._appointments.get(appointment_id)
            if before is None:
                return None
            after = mutate(before)
            self._appointments[appointment_id] = after
            return before, after

    def remove(self, appointment_id: str) -> bool:
        with self._lock:
            return self._appointments.pop(appointment_id, None) is not None

    def all(self) -> list[Appointment]:
        return list(self._appointments.values())


class MemoryLedgerRepository(LedgerRepositoryPort):
    def __init__(self) -> None:
        self._entries: dict[str, LedgerEntry] = {}
        self._lock = threading.Lock()

    def put(self, entry: LedgerEntry) -> None:
        with self._lock:
            self._entries[entry.appointment_id] = entry

    def get(self, appointment_id: str) -> LedgerEntry | None:
        return self._entries.get(appointment_id)

    def remove(self, appointment_id: str) -> bool:
        with self._lock:
            return self._entries.pop(appointment_id, None) is not None

    def all(self) -> list[LedgerEntry]:
        return list(self._entries.values())
