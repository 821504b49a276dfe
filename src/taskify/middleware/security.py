"""Security headers middleware.

Learn: Adds standard security headers to every response. The API only
ever serves JSON, so the policy can be strict:
- X-Content-Type-Options: prevents MIME-type sniffing
- X-Frame-Options / frame-ancestors: nothing may frame an API response
- X-XSS-Protection: legacy browser XSS filter in blocking mode
- Referrer-Policy: limits referrer info leakage
- Cache-Control on /api/auth/*: responses there carry bearer tokens and
  must never land in a shared or browser cache
- Strict-Transport-Security: forces HTTPS (only on HTTPS connections)
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

AUTH_PATH_PREFIX = "/api/auth"

# Swagger UI at /docs needs inline scripts, so it keeps the default policy.
_DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        path = request.url.path

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not path.startswith(_DOCS_PATHS):
            response.headers["Content-Security-Policy"] = (
                "default-src 'none'; frame-ancestors 'none'"
            )
        if path.startswith(AUTH_PATH_PREFIX):
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response
