"""
Request logging middleware.

Every request gets an X-Request-ID (the caller's, or a fresh UUID) that is
attached to its log records and echoed on the response.

Dependencies: fastapi, starlette
System role: HTTP access log for the analysis queue API
"""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATH_SUFFIXES = ("/health", "/health/db")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log line per request, tagged with the request id."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        started = time.perf_counter()
        line = f"{request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{line} - Unhandled {type(e).__name__}",
                extra={"request_id": request_id, "process_time_ms": _elapsed_ms(started)},
            )
            raise

        # Health checks run every few seconds
        quiet = request.url.path.endswith(QUIET_PATH_SUFFIXES)
        logger.log(
            logging.DEBUG if quiet else logging.INFO,
            f"{line} - {response.status_code}",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
