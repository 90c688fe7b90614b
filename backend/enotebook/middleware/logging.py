"""
ENotebook Backend — Access Logging Middleware
===============================================

What:  One access-log line per request: method, path, status, duration,
       request id and, on protected routes, the authenticated user id.
How:   The auth guard stores the resolved id on request.state.user_id; this
       middleware reads it after the route has run. Anonymous requests
       (register, login, rejected tokens) log "-" instead.

Log level by status class: 5xx ERROR, 4xx WARNING, everything else INFO.

Never logged: request bodies (passwords), the auth-token header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from enotebook.middleware.request_id import request_id_var

logger = logging.getLogger("enotebook.access")

_QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for every route except /health."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        user_id = getattr(request.state, "user_id", None)
        entry = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
            "user_id": str(user_id) if user_id else "-",
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            _level_for(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] user=%(user_id)s from %(client_ip)s",
            entry,
            extra=entry,
        )
        return response
