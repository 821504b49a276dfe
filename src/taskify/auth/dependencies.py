"""FastAPI auth dependencies: the authentication gate.

Learn: These are used as Depends() in route handlers to extract
and validate the current user from the request. Each request moves
through one tiny state machine:

    Unauthenticated → Authenticated   (identity returned to the handler)
    Unauthenticated → Rejected        (401 before any handler code runs)

Rejection happens when:
1. there is no "Authorization: Bearer <token>" header
2. the token fails validation (malformed, forged, or expired)
3. the token's subject no longer maps to a user

All three look the same to the client. The resolved identity is passed
explicitly into handlers: there is no global "current user".
"""

from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.auth.identity import IdentityNotFoundError, IdentityResolver
from taskify.auth.jwt import INVALID_TOKEN, TokenService
from taskify.auth.password import CredentialHasher
from taskify.db.engine import get_db
from taskify.db.models import User
from taskify.errors import AuthError
from taskify.metrics import AUTH_REJECTED, metrics

logger = structlog.get_logger()

AUTH_REQUIRED = "Authentication required"

# auto_error=False: a missing or non-Bearer header goes through _reject
# (401 + metrics) instead of FastAPI's built-in 403.
bearer_scheme = HTTPBearer(auto_error=False)


class CurrentIdentity:
    """The authenticated user for the lifetime of one request."""

    def __init__(self, user: User):
        self.user = user

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def email(self) -> str:
        return self.user.email


def get_token_service(request: Request) -> TokenService:
    """The process-wide TokenService built at startup."""
    return request.app.state.token_service


def get_credential_hasher(request: Request) -> CredentialHasher:
    """The process-wide CredentialHasher built at startup."""
    return request.app.state.credential_hasher


def _reject(detail: str, reason: str) -> HTTPException:
    metrics.increment(AUTH_REJECTED, reason=reason)
    logger.info("auth.rejected", reason=reason)
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db),
) -> CurrentIdentity:
    """Extract current identity (required: 401 if no valid auth).

    Learn: FastAPI caches dependencies per request, so mounting this on a
    router AND asking for it in a handler still runs it only once.
    """
    if credentials is None:
        raise _reject(AUTH_REQUIRED, reason="missing_or_malformed_header")

    try:
        subject = tokens.validate(credentials.credentials)
    except AuthError:
        raise _reject(INVALID_TOKEN, reason="invalid_token")

    try:
        user = await IdentityResolver(db).resolve(subject)
    except IdentityNotFoundError:
        raise _reject(INVALID_TOKEN, reason="unknown_subject")

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return CurrentIdentity(user)
