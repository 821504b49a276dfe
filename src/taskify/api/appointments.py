"""Appointment API routes: same shape and ownership rules as /tasks."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.auth.dependencies import CurrentIdentity, get_current_user
from taskify.db.engine import get_db
from taskify.errors import NotFoundError
from taskify.metrics import APPOINTMENTS_CREATED, metrics
from taskify.schemas.appointment import (
    AppointmentCreate,
    AppointmentRead,
    AppointmentUpdate,
)
from taskify.services.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments")


def _appointment_svc(db: AsyncSession = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentRead])
async def list_appointments(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AppointmentService = Depends(_appointment_svc),
):
    return await svc.list_appointments(identity.user)


@router.get("/{appointment_id}", response_model=AppointmentRead)
async def get_appointment(
    appointment_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AppointmentService = Depends(_appointment_svc),
):
    try:
        return await svc.get_appointment(appointment_id, identity.user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=AppointmentRead, status_code=201)
async def create_appointment(
    body: AppointmentCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AppointmentService = Depends(_appointment_svc),
):
    appointment = await svc.create_appointment(
        owner=identity.user, subject=body.subject, date=body.date
    )
    metrics.increment(APPOINTMENTS_CREATED)
    return appointment


@router.api_route(
    "/{appointment_id}", methods=["PUT", "PATCH"], response_model=AppointmentRead
)
async def update_appointment(
    appointment_id: int,
    body: AppointmentUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AppointmentService = Depends(_appointment_svc),
):
    """Partially update one of the caller's appointments."""
    try:
        return await svc.update_appointment(
            appointment_id=appointment_id,
            owner=identity.user,
            subject=body.subject,
            date=body.date,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: AppointmentService = Depends(_appointment_svc),
):
    try:
        await svc.delete_appointment(appointment_id, identity.user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
