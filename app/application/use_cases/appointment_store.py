from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Mapping

from app.application.exceptions import (
    AppointmentNotFoundError,
    InvalidServiceError,
    MissingFieldError,
    ValidationError,
)
from app.application.ports.appointment_repository import AppointmentRepositoryPort
from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.use_cases.ledger_projector import LedgerProjector
from app.domain.entities.appointment import TIME_SLOTS, Appointment, AppointmentStatus


REQUIRED_FIELDS = ("date", "time", "client_name", "client_phone", "service_kind")

# Fields a partial update may touch. id, created_at and the priced snapshot are fixed.
UPDATABLE_FIELDS = frozenset(
    {
        "date",
        "time",
        "client_name",
        "client_phone",
        "client_contact",
        "service_kind",
        "status",
        "notification_sent",
    }
)


class AppointmentStore:
    """
    Appointment record set with its ledger kept in step.

    create() and delete() always call the ledger projector before returning,
    so callers never have to remember to.
    """

    def __init__(
        self,
        repository: AppointmentRepositoryPort,
        catalog: PricingCatalogPort,
        projector: LedgerProjector,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._catalog = catalog
        self._projector = projector
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    def create(self, fields: Mapping[str, Any]) -> Appointment:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(fields.get(name))]
        if missing:
            raise MissingFieldError(missing)

        appointment_date = parse_date(fields["date"])
        appointment_time = parse_time(fields["time"])

        service_key = str(getattr(fields["service_kind"], "value", fields["service_kind"]))
        entry = self._catalog.get_service(service_key)
        if entry is None:
            raise InvalidServiceError(service_key)

        contact = fields.get("client_contact")
        appointment = Appointment(
            id=uuid.uuid4().hex,
            date=appointment_date,
            time=appointment_time,
            client_name=str(fields["client_name"]).strip(),
            client_phone=str(fields["client_phone"]).strip(),
            client_contact=str(contact).strip() if not _is_blank(contact) else None,
            service_kind=entry.service_kind,
            duration_minutes=entry.duration_minutes,
            price=entry.price,
            status=AppointmentStatus.pending,
            notification_sent=False,
            created_at=self._clock(),
        )

        self._repository.add(appointment)
        self._projector.project(appointment)
        self._logger.info(
            "Appointment created",
            extra={"appointment_id": appointment.id, "service": appointment.service_kind.value},
        )
        return appointment

    def get(self, appointment_id: str) -> Appointment:
        appointment = self._repository.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    def update(self, appointment_id: str, **fields: Any) -> tuple[Appointment, Appointment]:
        """
        Merge only the supplied fields. Returns (before, after).

        price and duration_minutes stay as captured at creation, even when
        service_kind is part of the update.
        """
        changes = self._coerce_changes(fields)
        result = self._repository.modify(
            appointment_id,
            lambda current: dataclasses.replace(current, **changes),
        )
        if result is None:
            raise AppointmentNotFoundError(appointment_id)
        return result

    def modify(
        self,
        appointment_id: str,
        mutate: Callable[[Appointment], Appointment],
    ) -> tuple[Appointment, Appointment]:
        """Atomic read-modify-write. Returns (before, after)."""
        result = self._repository.modify(appointment_id, mutate)
        if result is None:
            raise AppointmentNotFoundError(appointment_id)
        return result

    def delete(self, appointment_id: str) -> None:
        if not self._repository.remove(appointment_id):
            raise AppointmentNotFoundError(appointment_id)
        self._projector.remove(appointment_id)
        self._logger.info("Appointment deleted", extra={"appointment_id": appointment_id})

    def list(self) -> list[Appointment]:
        # sorted() is stable, so equal (date, time) keep insertion order
        return sorted(self._repository.all(), key=lambda a: a.sort_key)

    def list_by_status(self, status: AppointmentStatus | str) -> list[Appointment]:
        wanted = AppointmentStatus(status)
        return [a for a in self.list() if a.status == wanted]

    def _coerce_changes(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError("Fields cannot be updated: " + ", ".join(sorted(unknown)))

        changes: dict[str, Any] = {}
        for name, value in fields.items():
            if name == "date":
                changes[name] = parse_date(value)
            elif name == "time":
                changes[name] = parse_time(value)
            elif name == "status":
                try:
                    changes[name] = AppointmentStatus(value)
                except ValueError:
                    raise ValidationError(f"Unknown status: {value}") from None
            elif name == "service_kind":
                entry = self._catalog.get_service(str(getattr(value, "value", value)))
                if entry is None:
                    raise InvalidServiceError(str(value))
                changes[name] = entry.service_kind
            elif name in {"client_name", "client_phone"}:
                if _is_blank(value):
                    raise MissingFieldError([name])
                changes[name] = str(value).strip()
            elif name == "client_contact":
                changes[name] = str(value).strip() if not _is_blank(value) else None
            else:
                changes[name] = bool(value)
        return changes


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}, expected YYYY-MM-DD") from None


def parse_time(value: Any) -> str:
    text = str(value).strip()
    if text not in TIME_SLOTS:
        raise ValidationError(f"Invalid time slot: {value!r}")
    return text


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
