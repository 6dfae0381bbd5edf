from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("foh.api.access")

HTTP_REQUESTS_TOTAL = Counter(
    "foh_http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
HTTP_REQUEST_SECONDS = Histogram(
    "foh_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One log line per request. Per-action outcomes are counted by the dispatcher."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            fields = self._observe(request, 500, started)
            logger.exception("request_error", extra=fields)
            raise

        fields = self._observe(request, response.status_code, started)
        logger.info("request_complete", extra=fields)
        return response

    def _observe(self, request: Request, status_code: int, started: float) -> dict[str, object]:
        fields = self._fields(request, status_code, started)
        HTTP_REQUESTS_TOTAL.labels(
            method=request.method, path=request.url.path, status_code=str(status_code)
        ).inc()
        HTTP_REQUEST_SECONDS.labels(method=request.method, path=request.url.path).observe(
            float(fields["duration_ms"]) / 1000
        )
        return fields

    @staticmethod
    def _fields(request: Request, status_code: int, started: float) -> dict[str, object]:
        return {
            "method": request.method,
            "path": request.url.path,
            "action": request.query_params.get("action"),
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        }
