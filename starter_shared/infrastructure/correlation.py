"""
Request correlation.

Every request gets an ID: the client's X-Request-ID when it is short and made
of safe characters, a fresh UUID otherwise. The ID is echoed in the response,
stamped on every log record written while the request runs, and used for a
debug line summarizing the request.
"""

import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from starter_shared.config.constants import Correlation
from starter_shared.config.logging import get_logger

logger = get_logger(__name__)

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_ALLOWED = re.compile(Correlation.ALLOWED_PATTERN)


def accept_request_id(candidate: str | None) -> str:
    """The client's ID when usable; a new UUID for missing or unsafe values."""
    if candidate and len(candidate) <= Correlation.MAX_LENGTH and _ALLOWED.match(candidate):
        return candidate
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds the request ID for the duration of the request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = accept_request_id(request.headers.get(Correlation.HEADER))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[Correlation.HEADER] = request_id
            logger.debug(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            request_id_var.reset(token)


class CorrelationIdFilter(logging.Filter):
    """Sets record.request_id, "-" outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
