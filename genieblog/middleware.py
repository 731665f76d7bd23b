"""Middleware: request IDs and access logging, security and cache headers."""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Context var accessible from anywhere during a request lifecycle
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Published content changes rarely; let the CDN and browsers reuse it briefly
BLOG_CACHE_CONTROL = "public, max-age=300"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log how long it took.

    Reuses an incoming ``X-Request-ID`` header when present, otherwise
    generates a UUID4, and echoes it back on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(rid)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
        )
        response.headers["X-Request-ID"] = rid
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Standard security headers, plus caching for successful blog reads."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if (
            request.method == "GET"
            and request.url.path.startswith("/api/blog/")
            and response.status_code == 200
        ):
            response.headers.setdefault("Cache-Control", BLOG_CACHE_CONTROL)
        return response
