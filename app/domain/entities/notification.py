from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.domain.entities.appointment import Appointment


class NotificationKind(str, Enum):
    confirmation = "confirmation"
    reschedule = "reschedule"
    cancellation = "cancellation"
    reminder = "reminder"


@dataclass(frozen=True)
class NotificationIntent:
    kind: NotificationKind
    appointment: Appointment  # snapshot taken when the intent was raised

    @property
    def appointment_id(self) -> str:
        return self.appointment.id
