"""HTTP middleware: correlation id propagation and request latency."""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from zfounders.config.logging_config import correlation_id_var
from zfounders.observability.metrics import observe_request_latency


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", "NO Correlation ID")

        # Set in contextvars (propagates to async tasks and logging)
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers["X-Correlation-ID"] = correlation_id
        return response


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Records http_server_request_duration_seconds, labelled by route template."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        path = getattr(route, "path", "unmatched")
        observe_request_latency(
            request.method, path, response.status_code, time.perf_counter() - start
        )
        return response
