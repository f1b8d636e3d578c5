import logging
import re
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

logger = logging.getLogger("outline.requests")

CORRELATION_HEADER = "X-Correlation-ID"
# Caller-supplied IDs end up in log lines; anything else gets a fresh UUID
_CORRELATION_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Liveness probes hit every few seconds; keep them out of INFO output
QUIET_PATHS = frozenset({"/health", "/healthz"})


def _correlation_id(supplied: Optional[str]) -> str:
    if supplied and _CORRELATION_ID_PATTERN.fullmatch(supplied):
        return supplied
    return str(uuid.uuid4())


class LoggingMiddleware(BaseHTTPMiddleware):
    """One log line per HTTP request: method, path, status, latency, correlation ID.

    Paths only. Query strings, bodies and headers can carry search text or
    credentials and are never logged.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        correlation_id = _correlation_id(request.headers.get(CORRELATION_HEADER))
        request.state.correlation_id = correlation_id
        started = time.perf_counter()

        response = await call_next(request)

        latency_ms = (time.perf_counter() - started) * 1000
        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} -> {response.status_code} "
            f"({latency_ms:.2f}ms) cid={correlation_id}",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "latency_ms": round(latency_ms, 2),
            },
        )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
