"""
FastAPI middleware for request tracing (request_id + latency) and rate limiting.
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from .logging import get_logger, request_id_var
from .metrics import metrics
from .rate_limit import RateLimiter

_LOG = get_logger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            metrics.increment_requests()
            metrics.record_latency(duration_ms)
            status = response.status_code if response is not None else "ERROR"
            if response is None or response.status_code >= 500:
                metrics.increment_errors()
            _LOG.info(
                f"{request.method} {request.url.path} {status}",
                extra={"status": status, "duration_ms": duration_ms},
            )
            request_id_var.reset(token)
            if response is not None:
                response.headers["X-Request-ID"] = request_id


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, limiter: RateLimiter) -> None:
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client = request.client.host if request.client else "unknown"
        if not self.limiter.allow(client):
            _LOG.warning(f"rate limit exceeded client={client} path={request.url.path}")
            return JSONResponse(
                {"error": "Too many requests, please try again later."},
                status_code=429,
                headers={"Retry-After": str(self.limiter.retry_after(client))},
            )
        return await call_next(request)
