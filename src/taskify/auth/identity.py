"""Identity resolution: validated token subject → User row."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.db.models import User
from taskify.errors import TaskifyError


class IdentityNotFoundError(TaskifyError):
    """No user exists for the given subject."""


class IdentityResolver:
    """Looks up the user a token speaks for.

    Learn: Stateless: one query per call against the unique email
    column. The database provides consistency, so concurrent requests
    need no locking here.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def resolve(self, subject: str) -> User:
        user = await self.find(subject)
        if user is None:
            raise IdentityNotFoundError(subject)
        return user
