from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable

from app.application.exceptions import CorruptedStoreError
from app.application.ports.appointment_repository import AppointmentRepositoryPort
from app.application.ports.ledger_repository import LedgerRepositoryPort
from app.domain.entities.appointment import Appointment, AppointmentStatus, ServiceKind
from app.domain.entities.ledger_entry import LedgerEntry, PaymentStatus


logger = logging.getLogger(__name__)


class _JsonCollection:
    """A list of records persisted as one JSON file, rewritten atomically."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def load(self) -> list[dict[str, Any]]:
        """
        Load records from disk, return empty list if missing.

        An unreadable file raises CorruptedStoreError instead of reading as
        empty, so the next save cannot overwrite the records it still holds.
        """
        if not self._file_path.exists():
            return []
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error(
                "Failed to read collection, refusing to overwrite it",
                extra={"reason": str(e), "path": str(self._file_path)},
            )
            raise CorruptedStoreError(str(self._file_path), str(e)) from e
        if not isinstance(data, dict) or not isinstance(data.get("records", []), list):
            logger.error(
                "Unexpected collection layout, refusing to overwrite it",
                extra={"path": str(self._file_path)},
            )
            raise CorruptedStoreError(str(self._file_path), "expected an object with a records list")
        return [r for r in data.get("records", []) if isinstance(r, dict)]

    def save(self, records: list[dict[str, Any]]) -> None:
        """Save records to disk atomically."""
        temp_path = self._file_path.with_suffix(".json.tmp")
        payload = {"version": 1, "records": records}
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise


class JsonAppointmentRepository(AppointmentRepositoryPort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(Path(data_dir) / "appointments.json")

    def add(self, appointment: Appointment) -> None:
        with self._collection.lock:
            records = self._collection.load()
            records = [r for r in records if r.get("id") != appointment.id]
            records.append(self._serialize(appointment))
            self._collection.save(records)

    def get(self, appointment_id: str) -> Appointment | None:
        with self._collection.lock:
            for record in self._collection.load():
                if record.get("id") == appointment_id:
                    return self._deserialize(record)
        return None

    def modify(
        self,
        appointment_id: str,
        mutate: Callable[[Appointment], Appointment],
    ) -> tuple[Appointment, Appointment] | None:
        with self._collection.lock:
            records = self._collection.load()
            for index, record in enumerate(records):
                if record.get("id") != appointment_id:
                    continue
                before = self._deserialize(record)
                after = mutate(before)
                records[index] = self._serialize(after)
                self._collection.save(records)
                return before, after
        return None

    def remove(self, appointment_id: str) -> bool:
        with self._collection.lock:
            records = self._collection.load()
            kept = [r for r in records if r.get("id") != appointment_id]
            if len(kept) == len(records):
                return False
            self._collection.save(kept)
            return True

    def all(self) -> list[Appointment]:
        with self._collection.lock:
            return [self._deserialize(r) for r in self._collection.load()]

    def _serialize(self, appointment: Appointment) -> dict[str, Any]:
        return {
            "id": appointment.id,
            "date": appointment.date.isoformat(),
            "time": appointment.time,
            "client_name": appointment.client_name,
            "client_phone": appointment.client_phone,
            "client_contact": appointment.client_contact,
            "service_kind": appointment.service_kind.value,
            "duration_minutes": appointment.duration_minutes,
            "price": appointment.price,
            "status": appointment.status.value,
            "notification_sent": appointment.notification_sent,
            "created_at": appointment.created_at.isoformat(),
        }

    def _deserialize(self, data: dict[str, Any]) -> Appointment:
        return Appointment(
            id=data["id"],
            date=date.fromisoformat(data["date"]),
            time=data["time"],
            client_name=data["client_name"],
            client_phone=data.get("client_phone", ""),
            client_contact=data.get("client_contact"),
            service_kind=ServiceKind(data["service_kind"]),
            duration_minutes=int(data["duration_minutes"]),
            price=int(data["price"]),
            status=AppointmentStatus(data.get("status", "pending")),
            notification_sent=bool(data.get("notification_sent", False)),
            created_at=datetime.fromisoformat(data["created_at"]),
        )


class JsonLedgerRepository(LedgerRepositoryPort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(Path(data_dir) / "ledger.json")

    def put(self, entry: LedgerEntry) -> None:
        with self._collection.lock:
            records = self._collection.load()
            serialized = self._serialize(entry)
            for index, record in enumerate(records):
                if record.get("appointment_id") == entry.appointment_id:
                    records[index] = serialized
                    break
            else:
                records.append(serialized)
            self._collection.save(records)

    def get(self, appointment_id: str) -> LedgerEntry | None:
        with self._collection.lock:
            for record in self._collection.load():
                if record.get("appointment_id") == appointment_id:
                    return self._deserialize(record)
        return None

    def remove(self, appointment_id: str) -> bool:
        with self._collection.lock:
            records = self._collection.load()
            kept = [r for r in records if r.get("appointment_id") != appointment_id]
            if len(kept) == len(records):
                return False
            self._collection.save(kept)
            return True

    def all(self) -> list[LedgerEntry]:
        with self._collection.lock:
            return [self._deserialize(r) for r in self._collection.load()]

    def _serialize(self, entry: LedgerEntry) -> dict[str, Any]:
        return {
            "appointment_id": entry.appointment_id,
            "date": entry.date.isoformat(),
            "client_name": entry.client_name,
            "service_kind": entry.service_kind.value,
            "price": entry.price,
            "status": entry.status.value,
            "created_at": entry.created_at.isoformat(),
        }

    def _deserialize(self, data: dict[str, Any]) -> LedgerEntry:
        return LedgerEntry(
            appointment_id=data["appointment_id"],
            date=date.fromisoformat(data["date"]),
            client_name=data["client_name"],
            service_kind=ServiceKind(data["service_kind"]),
            price=int(data["price"]),
            status=PaymentStatus(data.get("status", "pending")),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
