from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from app.domain.entities.appointment import ServiceKind


class PaymentStatus(str, Enum):
    pending = "pending"
    received = "received"
    cancelled = "cancelled"


@dataclass(frozen=True)
class LedgerEntry:
    appointment_id: str
    date: date
    client_name: str
    service_kind: ServiceKind
    price: int
    created_at: datetime
    status: PaymentStatus = PaymentStatus.pending
