"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects all routes in each router
without relying on every handler remembering to ask for it. The
public endpoints are exactly: health, metrics, and the auth router
(register, login, logout; /auth/me checks auth itself).
"""

from fastapi import APIRouter, Depends

from taskify.api.appointments import router as appointments_router
from taskify.api.auth import router as auth_router
from taskify.api.health import router as health_router
from taskify.api.tasks import router as tasks_router
from taskify.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: require a valid bearer token
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
api_router.include_router(appointments_router, tags=["appointments"], dependencies=_auth)
