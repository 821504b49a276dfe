"""Appointment service: owner-scoped CRUD for appointments."""

from datetime import datetime
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.auth.ownership import OwnershipGuard
from taskify.db.models import Appointment, User

logger = structlog.get_logger()


class AppointmentService:
    """Business logic for appointment CRUD. Same ownership rules as tasks."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = OwnershipGuard(db, Appointment, "Appointment")

    async def create_appointment(
        self, owner: User, subject: str, date: datetime
    ) -> Appointment:
        appointment = Appointment(subject=subject, date=date)
        self.guard.assign(appointment, owner)
        self.db.add(appointment)
        await self.db.commit()
        await self.db.refresh(appointment)

        logger.info("appointment.created", appointment_id=appointment.id, owner_id=owner.id)
        return appointment

    async def get_appointment(self, appointment_id: int, owner: User) -> Appointment:
        return await self.guard.find_owned(appointment_id, owner)

    async def list_appointments(self, owner: User) -> list[Appointment]:
        return await self.guard.list_owned(owner)

    async def update_appointment(
        self,
        appointment_id: int,
        owner: User,
        subject: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> Appointment:
        """Partial update: only non-None fields are applied."""
        appointment = await self.guard.find_owned(appointment_id, owner)

        changed = False
        if subject is not None:
            appointment.subject = subject
            changed = True
        if date is not None:
            appointment.date = date
            changed = True

        if changed:
            await self.db.commit()
            await self.db.refresh(appointment)
            logger.info("appointment.updated", appointment_id=appointment.id)
        return appointment

    async def delete_appointment(self, appointment_id: int, owner: User) -> None:
        appointment = await self.guard.find_owned(appointment_id, owner)
        await self.db.delete(appointment)
        await self.db.commit()
        logger.info("appointment.deleted", appointment_id=appointment_id, owner_id=owner.id)
