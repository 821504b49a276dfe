"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode: create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

The engine belongs to the app, not the module: create_app() builds one from
its Settings and parks it (and its session factory) on app.state. get_db
reads them back from the request, so two apps with different settings never
share a database.

SQLite (aiosqlite) is the zero-setup default; point TASKIFY_DATABASE_URL
at postgresql+asyncpg://... for a real deployment.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskify.config import Settings
from taskify.db.models import Base


def _engine_kwargs(url: str) -> dict:
    # SQLite has no server-side pool to size.
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 5, "max_overflow": 15}


def build_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        **_engine_kwargs(settings.database_url),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: each request gets its own session."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(bind: AsyncEngine) -> None:
    """Create all tables that don't exist yet."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncSession:
    """FastAPI dependency: yields a session per request, auto-closes."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
