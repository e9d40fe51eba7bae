from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.ledger_entry import LedgerEntry


class LedgerRepositoryPort(ABC):
    @abstractmethod
    def put(self, entry: LedgerEntry) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, appointment_id: str) -> LedgerEntry | None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, appointment_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def all(self) -> list[LedgerEntry]:
        raise NotImplementedError
