from __future__ import annotations

import logging

from app.application.ports.ledger_repository import LedgerRepositoryPort
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.ledger_entry import LedgerEntry, PaymentStatus


class LedgerProjector:
    """
    Keeps one ledger entry per live appointment.

    Entries are created pending and are never promoted to received here:
    revenue is computed from appointment status, not from entry status.
    """

    def __init__(self, ledger: LedgerRepositoryPort) -> None:
        self._ledger = ledger
        self._logger = logging.getLogger(__name__)

    def project(self, appointment: Appointment) -> LedgerEntry:
        entry = LedgerEntry(
            appointment_id=appointment.id,
            date=appointment.date,
            client_name=appointment.client_name,
            service_kind=appointment.service_kind,
            price=appointment.price,
            created_at=appointment.created_at,
            status=PaymentStatus.pending,
        )
        self._ledger.put(entry)
        self._logger.info(
            "Ledger entry projected",
            extra={"appointment_id": appointment.id, "service": appointment.service_kind.value},
        )
        return entry

    def reconcile(self, appointment: Appointment, new_status: AppointmentStatus) -> LedgerEntry | None:
        if new_status == AppointmentStatus.cancelled:
            self.remove(appointment.id)
            return None

        entry = self._ledger.get(appointment.id)
        if entry is None:
            # Only reachable after a manual override out of cancelled.
            self._logger.warning(
                "Ledger entry missing for live appointment, re-projecting",
                extra={"appointment_id": appointment.id, "status": new_status.value},
            )
            return self.project(appointment)
        return entry

    def remove(self, appointment_id: str) -> None:
        if self._ledger.remove(appointment_id):
            self._logger.info("Ledger entry removed", extra={"appointment_id": appointment_id})

    def get(self, appointment_id: str) -> LedgerEntry | None:
        return self._ledger.get(appointment_id)

    def entries(self) -> list[LedgerEntry]:
        """Ledger entries, most recent appointment date first."""
        return sorted(self._ledger.all(), key=lambda e: e.date, reverse=True)
