from __future__ import annotations

from app.application.ports.pricing_catalog import PricingCatalogPort
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.infrastructure.catalog.service_catalog_data import SERVICE_CATALOG


class PricingCatalog(PricingCatalogPort):
    def __init__(self, catalog: dict[str, ServiceCatalogEntry] | None = None) -> None:
        self._catalog = dict(SERVICE_CATALOG if catalog is None else catalog)

    def get_service(self, service_kind: str) -> ServiceCatalogEntry | None:
        normalized_key = str(getattr(service_kind, "value", service_kind)).lower().strip()
        return self._catalog.get(normalized_key)

    def price_of(self, service_kind: str) -> int | None:
        entry = self.get_service(service_kind)
        if not entry:
            return None
        return entry.price

    def duration_of(self, service_kind: str) -> int | None:
        entry = self.get_service(service_kind)
        if not entry:
            return None
        return entry.duration_minutes

    def list_services(self) -> list[ServiceCatalogEntry]:
        return list(self._catalog.values())

    def set_entry(self, entry: ServiceCatalogEntry) -> None:
        """Replace a catalog entry. Existing appointments keep their snapshot."""
        self._catalog[entry.service_kind.value] = entry
