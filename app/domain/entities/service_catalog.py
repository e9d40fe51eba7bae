from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.appointment import ServiceKind


@dataclass(frozen=True)
class ServiceCatalogEntry:
    service_kind: ServiceKind
    display_name: str
    price: int
    duration_minutes: int
    notes: str | None = None
