"""Request tracing and timing middleware."""

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

CallNext = Callable[[Request], Awaitable[Response]]

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

# Rendering plus retries can take tens of seconds; anything beyond this is worth a look
SLOW_REQUEST_MS = 20_000

logger = structlog.get_logger()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the log context and echo it on the response.

    A caller-supplied ID is reused (truncated) so traces can span services.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
        request_id = supplied[:MAX_REQUEST_ID_LENGTH] or uuid.uuid4().hex

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its duration and expose the duration as a header."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        start_time = time.perf_counter()
        logger.debug("request_started", method=request.method, path=request.url.path)

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers["X-Process-Time-Ms"] = str(duration_ms)

        log = logger.warning if duration_ms > SLOW_REQUEST_MS else logger.info
        log(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            slow=duration_ms > SLOW_REQUEST_MS,
        )
        return response
