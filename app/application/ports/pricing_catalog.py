from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceCatalogEntry


class PricingCatalogPort(ABC):
    @abstractmethod
    def get_service(self, service_kind: str) -> ServiceCatalogEntry | None:
        """Get catalog entry by service kind, None if unknown."""
        raise NotImplementedError

    @abstractmethod
    def price_of(self, service_kind: str) -> int | None:
        raise NotImplementedError

    @abstractmethod
    def duration_of(self, service_kind: str) -> int | None:
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[ServiceCatalogEntry]:
        raise NotImplementedError
