from __future__ import annotations

from app.domain.entities.appointment import ServiceKind
from app.infrastructure.catalog.pricing_catalog import PricingCatalog


def test_catalog_lookup():
    catalog = PricingCatalog()

    entry = catalog.get_service("combo")
    assert entry is not None
    assert entry.display_name == "Haircut + Beard"
    assert catalog.price_of("combo") == 45
    assert catalog.duration_of("combo") == 60
    assert catalog.price_of(ServiceKind.haircut) == 30
    assert catalog.duration_of(" Beard ") == 20


def test_catalog_unknown_service():
    catalog = PricingCatalog()

    assert catalog.get_service("manicure") is None
    assert catalog.price_of("manicure") is None
    assert catalog.duration_of("manicure") is None


def test_catalog_lists_every_service_kind():
    kinds = {entry.service_kind for entry in PricingCatalog().list_services()}
    assert kinds == set(ServiceKind)
