from __future__ import annotations

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from topoauth import __version__
from topoauth.api.endpoints import health, resolve
from topoauth.api.middleware.error_shaping import SafeErrorMiddleware
from topoauth.api.middleware.request_context import RequestContextMiddleware, SecurityHeadersMiddleware
from topoauth.core.auth import default_registry
from topoauth.core.config import ServiceSettings

settings = ServiceSettings.from_env()

app = FastAPI(
    title="Topology Authorization Resolver",
    version=__version__,
)

# gateway is built on first use (see topoauth.api.deps)
app.state.settings = settings
app.state.gateway = None
app.state.registry = default_registry()

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
#   SafeErrorMiddleware -> SecurityHeaders -> RequestContext -> handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SecurityHeadersMiddleware, enabled=settings.security_headers_enabled)
app.add_middleware(SafeErrorMiddleware)

app.include_router(resolve.router)
app.include_router(health.router)


@app.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
