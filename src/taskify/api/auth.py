"""Auth API: registration, login, logout.

Learn: Routes for the account lifecycle:
- POST /auth/register → create an account, returns a token right away
- POST /auth/login → email/password → JWT
- POST /auth/logout → stateless acknowledgement (client drops the token)
- GET /auth/me → current user info (the only protected route here)

register, login and logout are public: this router is mounted without
the auth gate, and /me asks for the identity itself.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from taskify.auth.dependencies import (
    CurrentIdentity,
    get_credential_hasher,
    get_current_user,
    get_token_service,
)
from taskify.auth.jwt import TokenService
from taskify.auth.password import CredentialHasher
from taskify.db.engine import get_db
from taskify.errors import ConflictError, CredentialError
from taskify.metrics import LOGIN_ATTEMPTS, LOGIN_SUCCESS, USERS_REGISTERED, metrics
from taskify.schemas.task import NOT_BLANK
from taskify.services.user_service import UserService

router = APIRouter(prefix="/auth")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ─── Schemas ─────────────────────────────────────────────


class RegisterRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, pattern=NOT_BLANK)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, pattern=NOT_BLANK)


class AuthResponse(BaseModel):
    token: str
    email: str
    token_type: str = "bearer"
    message: str


class LogoutResponse(BaseModel):
    message: str
    instruction: str


class UserRead(BaseModel):
    id: int
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


def _user_svc(
    db: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_credential_hasher),
) -> UserService:
    return UserService(db, hasher)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    svc: UserService = Depends(_user_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new account and log it in."""
    try:
        user = await svc.register(body.email, body.password)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    metrics.increment(USERS_REGISTERED)
    return AuthResponse(
        token=tokens.issue(user.email),
        email=user.email,
        message="Registration successful",
    )


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    svc: UserService = Depends(_user_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → JWT."""
    metrics.increment(LOGIN_ATTEMPTS)
    try:
        user = await svc.authenticate(body.email, body.password)
    except CredentialError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    metrics.increment(LOGIN_SUCCESS)
    return AuthResponse(
        token=tokens.issue(user.email),
        email=user.email,
        message="Login successful",
    )


# ─── Logout ──────────────────────────────────────────────


@router.post("/logout", response_model=LogoutResponse)
async def logout():
    """Stateless logout.

    Learn: Tokens aren't stored server-side, so there is nothing to
    revoke. The client discards its token; it stays technically valid
    until it expires.
    """
    return LogoutResponse(
        message="Logout successful",
        instruction="Token should be discarded by client",
    )


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
async def get_me(identity: CurrentIdentity = Depends(get_current_user)):
    """Get the current authenticated user's info."""
    return identity.user
