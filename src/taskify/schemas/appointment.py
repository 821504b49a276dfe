"""Pydantic schemas for appointments."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from taskify.schemas.task import NOT_BLANK


def _as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Appointments are stored as naive wall-clock datetimes in UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class AppointmentCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=255, pattern=NOT_BLANK)
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_naive_utc(value)


class AppointmentUpdate(BaseModel):
    """Partial update: only non-None fields are applied."""
    subject: Optional[str] = Field(
        None, min_length=1, max_length=255, pattern=NOT_BLANK
    )
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_naive_utc(value)


class AppointmentRead(BaseModel):
    id: int
    subject: str
    date: datetime
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}
