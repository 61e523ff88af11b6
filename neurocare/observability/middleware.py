"""
FastAPI middleware for observability.

CorrelationMiddleware tags every request with an X-Correlation-ID (taken
from the caller or generated) so log lines from one request can be joined.
RequestLoggingMiddleware logs each request with its status and latency.

Dependencies: fastapi, starlette, neurocare.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from neurocare.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request outcome; unhandled errors are logged and re-raised."""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        context = {
            "method": request.method,
            "path": request.url.path,
            "user_id": request.headers.get("X-User-ID"),
        }

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{route} failed",
                extra={**context, "duration_ms": _elapsed_ms(started), "error_type": type(e).__name__},
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"{route} -> {response.status_code}",
            extra={**context, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID for the duration of the request and echo it back."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
