"""Request ID + access log middleware.

Learn: Every request gets an ID, either from the incoming X-Request-ID
header (so the SPA or a proxy can correlate) or a fresh UUID. The ID,
method and path are bound to structlog's contextvars, so every log
line written while handling the request carries them, including the
auth gate's rejections and the services' task.created events.

Incoming IDs are only trusted if they look like an ID; anything long or
full of odd characters is replaced, so it can't pollute the logs.
"""

import re
import time
import uuid
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def pick_request_id(incoming: Optional[str]) -> str:
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Generate and propagate a request ID; log one line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = pick_request_id(request.headers.get("X-Request-ID"))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        response: Response = await call_next(request)
        logger.info(
            "http.request",
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response.headers["X-Request-ID"] = request_id
        return response
