"""
FastAPI middleware for request tracing and correlation.

Each request gets a UUID that is exposed on request.state, echoed back in the
X-Request-ID header and bound into structlog's context so every log line
emitted while handling the request (including booking state transitions)
carries it.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add unique request IDs to each HTTP request.

    A caller-supplied X-Request-ID header is reused so the staff UI or the voice
    agent bridge can correlate their own logs with ours; otherwise a new UUID
    is generated.

    Example:
        >>> from hotelhub.middleware import RequestIDMiddleware
        >>> app.add_middleware(RequestIDMiddleware)
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "path")

        response.headers["X-Request-ID"] = request_id
        return response
