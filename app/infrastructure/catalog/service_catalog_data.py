from __future__ import annotations

from app.domain.entities.appointment import ServiceKind
from app.domain.entities.service_catalog import ServiceCatalogEntry


SERVICE_CATALOG: dict[str, ServiceCatalogEntry] = {
    ServiceKind.haircut.value: ServiceCatalogEntry(
        service_kind=ServiceKind.haircut,
        display_name="Haircut",
        price=30,
        duration_minutes=30,
    ),
    ServiceKind.beard.value: ServiceCatalogEntry(
        service_kind=ServiceKind.beard,
        display_name="Beard",
        price=20,
        duration_minutes=20,
    ),
    ServiceKind.combo.value: ServiceCatalogEntry(
        service_kind=ServiceKind.combo,
        display_name="Haircut + Beard",
        price=45,
        duration_minutes=60,
    ),
}
