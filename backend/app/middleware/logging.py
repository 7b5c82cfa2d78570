"""
Timeledger Backend — Request Logging Middleware
================================================

What:  One access-log line per HTTP request: method, path, status, duration.
Who:   Applied to every request except /health.

Example:
    2024-01-15T12:00:00 [INFO] timeledger.access: GET /api/reports/utilization 200 12.4ms [a1b2c3d4] from 10.0.0.7

Level follows the status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies are never logged (time entries and notes may contain client details).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("timeledger.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Probed every few seconds by Docker and load balancers
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
