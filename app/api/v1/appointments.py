from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.v1.schemas import (
    AppointmentClientPatchSchema,
    AppointmentCreateSchema,
    AppointmentScheduleSchema,
    AppointmentSchema,
    AppointmentStatusSchema,
    NotificationRequestSchema,
)
from app.application.exceptions import (
    AppointmentNotFoundError,
    InvalidServiceError,
    InvalidTransitionError,
    ValidationError,
)
from app.application.use_cases.lifecycle import AppointmentLifecycle
from app.domain.entities.appointment import AppointmentStatus
from app.wiring.dependencies import get_lifecycle

router = APIRouter(prefix="/appointments")
logger = logging.getLogger(__name__)


@router.get("", response_model=list[AppointmentSchema])
def list_appointments(
    status: AppointmentStatus | None = None,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
):
    return [AppointmentSchema.from_entity(a) for a in lifecycle.list_appointments(status)]


@router.post("", response_model=AppointmentSchema, status_code=201)
def create_appointment(
    req: AppointmentCreateSchema,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
):
    try:
        appointment = lifecycle.create_appointment(req.model_dump())
    except (ValidationError, InvalidServiceError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AppointmentSchema.from_entity(appointment)


@router.get("/{appointment_id}", response_model=AppointmentSchema)
def get_appointment(
    appointment_id: str,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
):
    try:
        appointment = lifecycle.get_appointment(appointment_id)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AppointmentSchema.from_entity(appointment)


@router.post("/{appointment_id}/status", response_model=AppointmentSchema)
def set_status(
    appointment_id: str,
    req: AppointmentStatusSchema,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
):
    try:
        appointment = lifecycle.set_status(appointment_id, req.status)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return AppointmentSchema.from_entity(appointment)


@router.put("/{appointment_id}/schedule", response_model=AppointmentSchema)
def reschedule(
    appointment_id: str,
    req: AppointmentScheduleSchema,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
):
    try:
        appointment = lifecycle.reschedule(appointment_id, req.date, req.time)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AppointmentSchema.from_entity(appointment)


@router.patch("/{appointment_id}", response_model=AppointmentSchema)
def update_client(
    appointment_id: str,
    req: AppointmentClientPatchSchema,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
):
    try:
        appointment = lifecycle.update_client(appointment_id, **req.model_dump(exclude_unset=True))
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AppointmentSchema.from_entity(appointment)


@router.delete("/{appointment_id}")
def delete_appointment(
    appointment_id: str,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
) -> dict[str, bool]:
    try:
        lifecycle.delete_appointment(appointment_id)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}


@router.post("/{appointment_id}/notifications", status_code=202)
def send_notification(
    appointment_id: str,
    req: NotificationRequestSchema,
    lifecycle: AppointmentLifecycle = Depends(get_lifecycle),
) -> Response:
    try:
        lifecycle.send_notification(appointment_id, req.kind)
    except AppointmentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Manual notification requested", extra={"appointment_id": appointment_id, "kind": req.kind.value})
    return Response(status_code=202)
