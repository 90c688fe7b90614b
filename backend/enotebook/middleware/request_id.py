"""
ENotebook Backend — Request ID Middleware
===========================================

What:  Assigns a correlation id to each request and returns it in `X-Request-ID`.
How:   Reuses a client-supplied X-Request-ID, otherwise generates a short UUID.
       The id is stored in a ContextVar (read by loggers, the auth guard and
       exception handlers) and on request.state (read by route handlers).
When:  Outermost custom middleware, so every log line of a request carries it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are plenty for correlating log lines
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
