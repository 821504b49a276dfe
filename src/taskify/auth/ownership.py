"""Ownership guard: owner-scoped data access for tasks and appointments.

Learn: Every read, update and delete of a user-owned record goes
through find_owned(), which filters on BOTH the id and the owner in a
single query:

    SELECT ... FROM tasks WHERE id = :id AND owner_id = :owner_id

There is no "fetch by id, then compare owner" path. A
record that belongs to someone else simply isn't found, so the caller
gets the exact same 404 as for an id that never existed: no
403-vs-404 side channel revealing which ids are in use.

Ownership is set once (assign) and never changed afterwards, so a
scoped lookup followed by a write is safe without extra locking.
"""

from typing import Generic, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.db.models import Appointment, Task, User
from taskify.errors import NotFoundError

OwnedModel = TypeVar("OwnedModel", Task, Appointment)

# Primary keys are signed 64-bit integers on every supported backend.
MAX_RESOURCE_ID = 2**63 - 1


def _owner_id(owner: Union[User, int]) -> int:
    return owner if isinstance(owner, int) else owner.id


class OwnershipGuard(Generic[OwnedModel]):
    """Owner-scoped queries for one resource type."""

    def __init__(self, db: AsyncSession, model: type[OwnedModel], label: str):
        self.db = db
        self.model = model
        self.label = label

    @property
    def not_found_detail(self) -> str:
        return f"{self.label} not found"

    def scoped(self, owner: Union[User, int]):
        """Base SELECT restricted to one owner's rows."""
        return select(self.model).where(self.model.owner_id == _owner_id(owner))

    async def find_owned(self, resource_id: int, owner: Union[User, int]) -> OwnedModel:
        # No row can carry an id outside the column range; the driver would overflow on it.
        if not 0 < resource_id <= MAX_RESOURCE_ID:
            raise NotFoundError(self.not_found_detail)
        result = await self.db.execute(
            self.scoped(owner).where(self.model.id == resource_id)
        )
        resource = result.scalars().first()
        if resource is None:
            raise NotFoundError(self.not_found_detail)
        return resource

    async def list_owned(self, owner: Union[User, int]) -> list[OwnedModel]:
        result = await self.db.execute(self.scoped(owner).order_by(self.model.id))
        return list(result.scalars().all())

    def assign(self, resource: OwnedModel, owner: Union[User, int]) -> OwnedModel:
        """Stamp a new resource with its owner. Only valid before first flush."""
        if resource.owner_id is not None:
            raise ValueError(f"{self.label} already has an owner")
        resource.owner_id = _owner_id(owner)
        return resource
