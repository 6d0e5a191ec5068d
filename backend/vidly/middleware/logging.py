"""
Vidly Backend — Request Logging Middleware
===========================================

What:  One access log line per HTTP request on the `vidly.access` logger.
How:   Times the downstream app, then logs method, path, status, duration,
       client IP and, when an auth gate verified a token, the caller's user
       id. The request ID is added by RequestIDLogFilter.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, user id, request ID
    ❌ Don't log: request bodies (passwords on /api/users and /api/auth),
       the x-auth-token header, response bodies (tokens)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("vidly.access")

# Polled every few seconds by orchestrators; logging them drowns real traffic
QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING (rejected payloads, gates), else INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Set by require_authenticated; absent on public routes
        claims = getattr(request.state, "user", None)
        user_id = claims.id if claims is not None else "-"
        client = request.client.host if request.client else "unknown"

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms user=%s from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            user_id,
            client,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "user_id": user_id,
                "client_ip": client,
            },
        )
        return response
