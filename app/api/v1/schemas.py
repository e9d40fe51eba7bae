from datetime import date, datetime

from pydantic import BaseModel, Field

from app.domain.entities.appointment import Appointment, AppointmentStatus, ServiceKind
from app.domain.entities.ledger_entry import LedgerEntry, PaymentStatus
from app.domain.entities.notification import NotificationKind
from app.domain.entities.revenue import RevenueTotals
from app.domain.entities.service_catalog import ServiceCatalogEntry


class AppointmentCreateSchema(BaseModel):
    # Left loose so the lifecycle reports missing fields with its own error.
    date: str | None = None
    time: str | None = None
    client_name: str | None = None
    client_phone: str | None = None
    client_contact: str | None = None
    service_kind: str | None = None


class AppointmentStatusSchema(BaseModel):
    status: AppointmentStatus


class AppointmentScheduleSchema(BaseModel):
    date: date
    time: str


class AppointmentClientPatchSchema(BaseModel):
    client_name: str | None = None
    client_phone: str | None = None
    client_contact: str | None = None


class NotificationRequestSchema(BaseModel):
    kind: NotificationKind


class AppointmentSchema(BaseModel):
    id: str
    date: date
    time: str
    client_name: str
    client_phone: str
    client_contact: str | None = None
    service_kind: ServiceKind
    duration_minutes: int
    price: int
    status: AppointmentStatus
    notification_sent: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentSchema":
        return cls(
            id=appointment.id,
            date=appointment.date,
            time=appointment.time,
            client_name=appointment.client_name,
            client_phone=appointment.client_phone,
            client_contact=appointment.contact_channel,
            service_kind=appointment.service_kind,
            duration_minutes=appointment.duration_minutes,
            price=appointment.price,
            status=appointment.status,
            notification_sent=appointment.notification_sent,
            created_at=appointment.created_at,
        )


class LedgerEntrySchema(BaseModel):
    appointment_id: str
    date: date
    client_name: str
    service_kind: ServiceKind
    price: int
    status: PaymentStatus
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: LedgerEntry) -> "LedgerEntrySchema":
        return cls(
            appointment_id=entry.appointment_id,
            date=entry.date,
            client_name=entry.client_name,
            service_kind=entry.service_kind,
            price=entry.price,
            status=entry.status,
            created_at=entry.created_at,
        )


class RevenueTotalsSchema(BaseModel):
    all_time: int
    current_month: int
    pending_sum: int
    pending_count: int
    today_count: int
    by_service: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, totals: RevenueTotals) -> "RevenueTotalsSchema":
        return cls(
            all_time=totals.all_time,
            current_month=totals.current_month,
            pending_sum=totals.pending_sum,
            pending_count=totals.pending_count,
            today_count=totals.today_count,
            by_service=dict(totals.by_service),
        )


class ServiceSchema(BaseModel):
    service_kind: ServiceKind
    display_name: str
    price: int
    duration_minutes: int

    @classmethod
    def from_entity(cls, entry: ServiceCatalogEntry) -> "ServiceSchema":
        return cls(
            service_kind=entry.service_kind,
            display_name=entry.display_name,
            price=entry.price,
            duration_minutes=entry.duration_minutes,
        )
