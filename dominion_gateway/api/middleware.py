"""Request tracing, access logging and latency metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from dominion_gateway.infrastructure.observability.logging import log_request
from dominion_gateway.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"

# Scrapes and probes are not worth a log line or a latency sample
QUIET_PATHS = {"/health", "/metrics"}

UNMATCHED_ROUTE = "unmatched"


def _route_label(request: Request) -> str:
    """Full request path for matched routes, a fixed label otherwise so scanners cannot add series"""
    if request.scope.get("endpoint") is None and request.scope.get("route") is None:
        return UNMATCHED_ROUTE
    return request.url.path


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate or mint a request ID and echo it back to the caller"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe latency per route and write one access log line per request"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        endpoint = _route_label(request)
        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(duration)
        log_request(
            getattr(request.state, "request_id", "unknown"),
            request.method,
            endpoint,
            response.status_code,
            duration * 1000,
        )
        return response
