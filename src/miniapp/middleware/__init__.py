"""
Middleware that tags each request with a trace_id and logs it.

Log records written while a request is served share its trace_id; outside
production each call from the embedded client gets one request log line.
"""

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from miniapp.core.logging import logger, trace_id_context


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    Sets a fresh trace_id for the request, optionally logs
    "<timestamp> <METHOD> <path>" and returns the id as X-Trace-ID.
    """

    def __init__(self, app: ASGIApp, log_requests: bool = True) -> None:
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = str(uuid.uuid4())
        token = trace_id_context.set(trace_id)

        if self.log_requests:
            logger.info(f"{utc_timestamp()} {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            response.headers["X-Trace-ID"] = trace_id
            return response
        finally:
            trace_id_context.reset(token)


__all__ = ["RequestLogMiddleware", "utc_timestamp"]
