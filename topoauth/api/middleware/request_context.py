from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from topoauth.api.observability.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    normalize_path,
)

log = logging.getLogger("topoauth.request")

REQUEST_ID_HEADER = "X-Request-Id"

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def _resolution_fields(request: Request) -> Dict[str, Any]:
    state = request.state
    return {
        "family": getattr(state, "resolve_family", None),
        "outcome": getattr(state, "resolve_outcome", None),
    }


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every call with a request id (taken from the caller or generated),
    echoes it back and records the http counters.

    Calls under /api/ also get one log line; for resolve calls it names the
    family that answered and whether the route matched, failed or fell through.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER.lower()) or uuid.uuid4().hex
        request.state.request_id = rid

        started = time.perf_counter()
        resp = await call_next(request)
        elapsed = time.perf_counter() - started

        resp.headers[REQUEST_ID_HEADER] = rid

        method = request.method.upper()
        route = normalize_path(request.url.path)
        HTTP_REQUESTS_TOTAL.labels(method=method, path=route, status=str(resp.status_code)).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=route).observe(elapsed)

        # the resolved call's body and metadata are never logged
        if request.url.path.startswith("/api/"):
            log.info(
                "%s",
                {
                    "event": "request",
                    "request_id": rid,
                    "method": method,
                    "path": request.url.path,
                    "status_code": resp.status_code,
                    "duration_ms": int(elapsed * 1000),
                    **_resolution_fields(request),
                },
            )
        return resp


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the fixed response hardening headers unless disabled in settings."""

    def __init__(self, app, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        resp = await call_next(request)
        if self.enabled:
            for name, value in _SECURITY_HEADERS.items():
                resp.headers.setdefault(name, value)
        return resp
