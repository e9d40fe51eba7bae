from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from app.domain.entities.appointment import Appointment


class AppointmentRepositoryPort(ABC):
    """Durable appointment collection keyed by id, kept in insertion order."""

    @abstractmethod
    def add(self, appointment: Appointment) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, appointment_id: str) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
    def modify(
        self,
        appointment_id: str,
        mutate: Callable[[Appointment], Appointment],
    ) -> tuple[Appointment, Appointment] | None:
        """
        Atomic read-modify-write of one appointment.
        Returns (before, after), or None if the id is absent.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, appointment_id: str) -> bool:
        """Remove an appointment. Returns False if it did not exist."""
        raise NotImplementedError

    @abstractmethod
    def all(self) -> list[Appointment]:
        """All appointments in insertion order."""
        raise NotImplementedError
