"""Access log middleware — one structured log line per request.

Learn: Logs method, path, status, latency and client IP. Requests
slower than PEDAL_SLOW_REQUEST_SECONDS get an extra warning so they
stand out. Runs inside RequestIdMiddleware, so every line carries
the request_id.
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from pedal.middleware.rate_limit import client_ip

logger = structlog.get_logger()


class AccessLogMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, slow_seconds: float = 1.0):
        super().__init__(app)
        self.slow_seconds = slow_seconds

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - start

        logger.info(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(elapsed * 1000, 2),
            client_ip=client_ip(request),
        )
        if elapsed > self.slow_seconds:
            logger.warning(
                "request.slow",
                method=request.method,
                path=request.url.path,
                duration_ms=round(elapsed * 1000, 2),
            )
        return response
