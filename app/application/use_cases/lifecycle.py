from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Any, Callable, Mapping

from app.application.exceptions import InvalidTransitionError, ValidationError
from app.application.ports.notification_dispatcher import NotificationDispatcherPort
from app.application.use_cases.appointment_store import AppointmentStore, parse_date, parse_time
from app.application.use_cases.ledger_projector import LedgerProjector
from app.application.use_cases.revenue import compute_revenue_totals
from app.domain.entities.appointment import (
    Appointment,
    AppointmentStatus,
    can_transition,
    is_terminal,
)
from app.domain.entities.ledger_entry import LedgerEntry
from app.domain.entities.notification import NotificationIntent, NotificationKind
from app.domain.entities.revenue import RevenueTotals


class AppointmentLifecycle:
    def __init__(
        self,
        store: AppointmentStore,
        projector: LedgerProjector,
        dispatcher: NotificationDispatcherPort,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._store = store
        self._projector = projector
        self._dispatcher = dispatcher
        self._today = today or date.today
        self._logger = logging.getLogger(__name__)

    def create_appointment(self, fields: Mapping[str, Any]) -> Appointment:
        return self._store.create(fields)

    def get_appointment(self, appointment_id: str) -> Appointment:
        return self._store.get(appointment_id)

    def list_appointments(self, status: AppointmentStatus | str | None = None) -> list[Appointment]:
        if status is None:
            return self._store.list()
        return self._store.list_by_status(_parse_status(status))

    def set_status(self, appointment_id: str, status: AppointmentStatus | str) -> Appointment:
        new_status = _parse_status(status)
        current = self._store.get(appointment_id)

        if current.status == new_status and not is_terminal(current.status):
            return current
        if not can_transition(current.status, new_status):
            raise InvalidTransitionError(appointment_id, current.status.value, new_status.value)

        kind = self._status_notification(new_status, current)

        def apply(appointment: Appointment) -> Appointment:
            # Re-check against the stored record, the read above may be stale.
            if appointment.status == new_status and not is_terminal(appointment.status):
                return appointment
            if not can_transition(appointment.status, new_status):
                raise InvalidTransitionError(appointment_id, appointment.status.value, new_status.value)
            changes: dict[str, Any] = {"status": new_status}
            if kind is not None:
                changes["notification_sent"] = False
            return dataclasses.replace(appointment, **changes)

        before, after = self._store.modify(appointment_id, apply)
        if before.status == after.status:
            # Another caller made the same change first.
            return after
        self._projector.reconcile(after, new_status)
        self._logger.info(
            "Appointment status changed",
            extra={"appointment_id": appointment_id, "status": f"{before.status.value}->{after.status.value}"},
        )

        if kind is not None:
            self._notify(kind, after)
        return after

    def reschedule(self, appointment_id: str, new_date: date | str, new_time: str) -> Appointment:
        target_date = parse_date(new_date)
        target_time = parse_time(new_time)

        def apply(appointment: Appointment) -> Appointment:
            changes: dict[str, Any] = {"date": target_date, "time": target_time}
            if _announces_reschedule(appointment, target_date, target_time):
                changes["notification_sent"] = False
            return dataclasses.replace(appointment, **changes)

        before, after = self._store.modify(appointment_id, apply)
        if _announces_reschedule(before, target_date, target_time):
            self._notify(NotificationKind.reschedule, after)
        self._logger.info(
            "Appointment rescheduled",
            extra={"appointment_id": appointment_id, "reason": f"{after.date.isoformat()} {after.time}"},
        )
        return after

    def update_client(self, appointment_id: str, **fields: Any) -> Appointment:
        allowed = {"client_name", "client_phone", "client_contact"}
        changes = {k: v for k, v in fields.items() if k in allowed}
        if not changes:
            return self._store.get(appointment_id)
        _, after = self._store.update(appointment_id, **changes)
        return after

    def patch(self, appointment_id: str, **fields: Any) -> Appointment:
        """
        Raw field patch, status included, without transition validation.

        Kept for manual overrides. The ledger is still reconciled and the
        notifications a direct edit would trigger are still raised.
        """
        before, after = self._store.update(appointment_id, **fields)

        status_changed = before.status != after.status
        slot_changed = before.sort_key != after.sort_key

        if status_changed:
            self._projector.reconcile(after, after.status)
            self._logger.warning(
                "Appointment status overridden",
                extra={"appointment_id": appointment_id, "status": f"{before.status.value}->{after.status.value}"},
            )

        kinds: list[NotificationKind] = []
        if status_changed:
            kind = self._status_notification(after.status, after)
            if kind is not None:
                kinds.append(kind)
        if slot_changed and after.status == AppointmentStatus.confirmed:
            kinds.append(NotificationKind.reschedule)

        if kinds:
            _, after = self._store.update(appointment_id, notification_sent=False)
            for kind in kinds:
                self._notify(kind, after)
        return after

    def delete_appointment(self, appointment_id: str) -> None:
        self._store.delete(appointment_id)

    def send_notification(self, appointment_id: str, kind: NotificationKind | str) -> Appointment:
        """Manually raise a notification for an appointment, e.g. a reminder."""
        try:
            notification_kind = NotificationKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown notification kind: {kind}") from None
        appointment = self._store.get(appointment_id)
        self._notify(notification_kind, appointment)
        return appointment

    def ledger_entries(self) -> list[LedgerEntry]:
        return self._projector.entries()

    def get_revenue_totals(self) -> RevenueTotals:
        return compute_revenue_totals(
            self._store.list(),
            self._projector.entries(),
            today=self._today(),
        )

    def _status_notification(self, new_status: AppointmentStatus, appointment: Appointment) -> NotificationKind | None:
        if new_status == AppointmentStatus.confirmed:
            return NotificationKind.confirmation
        if new_status == AppointmentStatus.cancelled and appointment.contact_channel:
            return NotificationKind.cancellation
        return None

    def _notify(self, kind: NotificationKind, appointment: Appointment) -> None:
        try:
            self._dispatcher.enqueue(NotificationIntent(kind=kind, appointment=appointment))
        except Exception as e:
            # Delivery is best-effort; the scheduling change is already stored.
            self._logger.exception(
                "Failed to enqueue notification",
                extra={"appointment_id": appointment.id, "kind": kind.value, "error": str(e)},
            )


def _parse_status(status: AppointmentStatus | str) -> AppointmentStatus:
    try:
        return AppointmentStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown status: {status}") from None


def _announces_reschedule(appointment: Appointment, new_date: date, new_time: str) -> bool:
    moved = appointment.sort_key != (new_date, new_time)
    return moved and appointment.status == AppointmentStatus.confirmed
