"""Pydantic schemas for tasks.

Learn: Separate schemas for create/update/read keeps the API clean.
- TaskCreate: what you POST to create a task
- TaskUpdate: what you PUT/PATCH to modify a task (all optional)
- TaskRead: what the API returns

None of them has an owner field. The owner always comes from the
bearer token, so a client can't create or move a task into someone
else's list by putting an id in the body.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

STATUS_PATTERN = r"^(TODO|DONE)$"
# At least one non-whitespace character.
NOT_BLANK = r"\S"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, pattern=NOT_BLANK)
    description: Optional[str] = None
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)


class TaskUpdate(BaseModel):
    """Partial update: only non-None fields are applied."""
    title: Optional[str] = Field(
        None, min_length=1, max_length=255, pattern=NOT_BLANK
    )
    description: Optional[str] = None
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)


class TaskRead(BaseModel):
    id: int
    title: str
    description: Optional[str]
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}
