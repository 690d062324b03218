from __future__ import annotations

import logging
import traceback
from typing import Callable, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from topoauth.core.config import ConfigError
from topoauth.core.gateway import GatewayError

log = logging.getLogger("topoauth.errors")


def _shape(exc: Exception) -> Tuple[int, str]:
    # the gateway is built on first use, so a bad fixture or base url surfaces here
    if isinstance(exc, (ConfigError, GatewayError)):
        return 503, "Lookup gateway unavailable"
    return 500, "Internal Server Error"


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """Turns anything a resolve call raised into a bare status plus request id; details go to the log only."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            status, detail = _shape(e)
            log.error(
                "%s %s answered %d rid=%s: %r\n%s",
                request.method,
                request.url.path,
                status,
                rid,
                e,
                traceback.format_exc(),
            )
            payload = {"detail": detail}
            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=status, content=payload)
