"""Health check and metrics endpoints.

Learn: Simple GET endpoints, open to everyone. /health verifies the
server is running and the database is reachable; /metrics returns the
in-process business counters.
"""

from fastapi import APIRouter, Request
from sqlalchemy import text

from taskify import __version__
from taskify.metrics import metrics

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}


@router.get("/metrics")
async def get_metrics():
    """Snapshot of the business counters."""
    return {"counters": metrics.snapshot()}
