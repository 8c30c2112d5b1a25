"""Request logging middleware binding a request id to the structlog context."""

import time
import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from structlog import contextvars as structlog_contextvars

logger = structlog.get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with method, path, status and duration."""

    slow_request_threshold: float = 2.0  # seconds

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:16]
        structlog_contextvars.clear_contextvars()
        structlog_contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000),
            )
            raise

        duration = time.perf_counter() - start_time
        log = logger.warning if duration > self.slow_request_threshold else logger.info
        log(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000),
        )
        response.headers["X-Request-ID"] = request_id
        return response
