from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from topoauth.api.deps import get_gateway
from topoauth.core.config import ConfigError
from topoauth.core.gateway import GatewayError

log = logging.getLogger("topoauth.health")

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/live")
def liveness():
    return {"status": "alive"}


@router.get("/ready")
def readiness(request: Request):
    """
    Readiness reflects ability to serve traffic: settings parse and a lookup
    gateway can be constructed.
    """
    problems: list[str] = []
    try:
        get_gateway(request)
    except ConfigError as e:
        problems.append(f"config:{e}")
    except GatewayError as e:
        problems.append(f"gateway:{e}")

    if problems:
        log.warning("not ready: %s", problems)
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": problems},
        )

    return {"status": "ready"}
