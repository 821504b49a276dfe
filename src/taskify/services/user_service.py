"""User service: registration and credential checks.

Learn: Login failures are vague. An unknown email and a
wrong password raise the same CredentialError with the same message,
so the login endpoint can't be used to discover which emails have
accounts. Registration, on the other hand, reports a duplicate email
plainly: the registrant just typed that address themselves.

bcrypt is CPU-bound, so hashing runs in Starlette's threadpool and
never blocks the event loop for other requests.
"""

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from taskify.auth.identity import IdentityResolver
from taskify.auth.password import CredentialHasher
from taskify.db.models import User
from taskify.errors import ConflictError, CredentialError

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_TAKEN = "Email already registered"


class UserService:
    """Business logic for accounts."""

    def __init__(self, db: AsyncSession, hasher: CredentialHasher):
        self.db = db
        self.hasher = hasher
        self.identities = IdentityResolver(db)

    async def register(self, email: str, password: str) -> User:
        """Create an account. Raises ConflictError if the email is taken.

        The uniqueness check runs before any write; the unique index
        catches the race where two registrations for one email interleave.
        """
        if await self.identities.find(email) is not None:
            raise ConflictError(EMAIL_TAKEN)

        password_hash = await run_in_threadpool(self.hasher.hash, password)
        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(EMAIL_TAKEN)

        logger.info("user.registered", user_id=user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, else raise CredentialError."""
        user = await self.identities.find(email)
        if user is None:
            logger.info("auth.login_failed", reason="unknown_email")
            raise CredentialError(INVALID_CREDENTIALS)

        matches = await run_in_threadpool(
            self.hasher.verify, password, user.password_hash
        )
        if not matches:
            logger.info("auth.login_failed", reason="wrong_password", user_id=user.id)
            raise CredentialError(INVALID_CREDENTIALS)

        return user
