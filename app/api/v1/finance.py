from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.v1.schemas import LedgerEntrySchema, RevenueTotalsSchema, ServiceSchema
from app.application.use_cases.lifecycle import AppointmentLifecycle
from app.infrastructure.catalog.pricing_catalog import PricingCatalog
from app.wiring.dependencies import get_catalog, get_lifecycle

router = APIRouter()


@router.get("/ledger", response_model=list[LedgerEntrySchema])
def list_ledger(lifecycle: AppointmentLifecycle = Depends(get_lifecycle)):
    return [LedgerEntrySchema.from_entity(e) for e in lifecycle.ledger_entries()]


@router.get("/revenue", response_model=RevenueTotalsSchema)
def revenue(lifecycle: AppointmentLifecycle = Depends(get_lifecycle)):
    return RevenueTotalsSchema.from_entity(lifecycle.get_revenue_totals())


@router.get("/catalog", response_model=list[ServiceSchema])
def catalog(pricing: PricingCatalog = Depends(get_catalog)):
    return [ServiceSchema.from_entity(e) for e in pricing.list_services()]
