"""FastAPI application factory.

Learn: App factory pattern: create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (schema creation, engine
disposal). Middleware, CORS, and routers all registered here.

The TokenService, CredentialHasher and database engine are built exactly
once, from the Settings passed in, and parked on app.state. Handlers reach
them through dependencies; nothing reads the secret, work factor or
database URL from anywhere else.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskify import __version__
from taskify.api import api_router
from taskify.auth.jwt import TokenService
from taskify.auth.password import CredentialHasher
from taskify.config import Settings, settings as default_settings
from taskify.db.engine import build_engine, build_session_factory, create_schema

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    app_settings: Settings = app.state.settings
    logger.info(
        "taskify.starting",
        version=__version__,
        environment=app_settings.environment,
        port=app_settings.port,
        token_ttl_minutes=app_settings.token_expire_minutes,
    )

    await create_schema(app.state.engine)
    logger.info("taskify.schema_ready")

    yield

    logger.info("taskify.shutdown")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title="Taskify API",
        description="Personal tasks and appointments. Every record is private to its owner.",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration, login and logout"},
            {"name": "tasks", "description": "The caller's tasks"},
            {"name": "appointments", "description": "The caller's appointments"},
            {"name": "health", "description": "Liveness and counters"},
        ],
    )

    # Immutable process-wide auth configuration
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.credential_hasher = CredentialHasher(rounds=settings.bcrypt_rounds)

    # Database: one engine per app, built from the same settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from taskify.middleware.request_id import RequestIdMiddleware
    from taskify.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: taskify.main:app)
app = create_app()
