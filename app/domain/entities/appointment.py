from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ServiceKind(str, Enum):
    haircut = "haircut"
    beard = "beard"
    combo = "combo"


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


# Bookable slots, every 45 minutes from opening to the last chair.
TIME_SLOTS: tuple[str, ...] = (
    "09:00",
    "09:45",
    "10:30",
    "11:15",
    "12:00",
    "12:45",
    "13:30",
    "14:15",
    "15:00",
    "15:45",
    "16:30",
    "17:15",
    "18:00",
    "18:45",
    "19:30",
    "20:15",
    "21:00",
)

ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.pending: frozenset({AppointmentStatus.confirmed, AppointmentStatus.cancelled}),
    AppointmentStatus.confirmed: frozenset({AppointmentStatus.completed, AppointmentStatus.cancelled}),
    AppointmentStatus.cancelled: frozenset(),
    AppointmentStatus.completed: frozenset(),
}


def is_terminal(status: AppointmentStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class Appointment:
    id: str
    date: date
    time: str  # HH:MM, one of TIME_SLOTS
    client_name: str
    client_phone: str
    service_kind: ServiceKind
    duration_minutes: int
    price: int
    created_at: datetime
    client_contact: str | None = None
    status: AppointmentStatus = AppointmentStatus.pending
    notification_sent: bool = False

    @property
    def contact_channel(self) -> str | None:
        """Where notifications go: the explicit contact, else the phone."""
        return self.client_contact or self.client_phone or None

    @property
    def sort_key(self) -> tuple[date, str]:
        return (self.date, self.time)
