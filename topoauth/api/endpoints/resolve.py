from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from topoauth.api.deps import get_gateway, get_registry, get_settings
from topoauth.api.observability.metrics import record_resolution
from topoauth.api.schemas.resolve import (
    ResolveRequestModel,
    ResolveResponseModel,
    RoutesResponseModel,
)
from topoauth.core.auth import RequestContext, ResolverRegistry
from topoauth.core.auth.errors import ResolveError
from topoauth.core.config import ServiceSettings
from topoauth.core.gateway import ModelLookupGateway

router = APIRouter(prefix="/api/v1/authz", tags=["authz"])


def _families_or_404(registry: ResolverRegistry, version: str):
    try:
        return registry.families(version)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown api version: {version}")


@router.post("/resolve", response_model=ResolveResponseModel)
def resolve_resources(
    req: ResolveRequestModel,
    request: Request,
    settings: ServiceSettings = Depends(get_settings),
    gateway: ModelLookupGateway = Depends(get_gateway),
    registry: ResolverRegistry = Depends(get_registry),
):
    _families_or_404(registry, req.version)

    ctx = RequestContext.build(req.method, req.path, body=req.body, metadata=req.metadata)
    result = registry.resolve(ctx, gateway, req.version)
    request.state.resolve_family = result.family

    if result.failed:
        failure = result.failure
        kind = failure.kind if isinstance(failure, ResolveError) else "resolve"
        request.state.resolve_outcome = "failed"
        record_resolution("failed", result.family, kind)
        return {
            "version": result.version,
            "matched": result.matched,
            "family": result.family,
            "resources": [],
            "error": {"kind": kind, "message": str(failure)},
            "decision": "deny",
        }

    if not result.matched:
        request.state.resolve_outcome = "unmatched"
        record_resolution("unmatched", None, None)
        return {
            "version": result.version,
            "matched": False,
            "family": None,
            "resources": [],
            "error": None,
            "decision": settings.unmatched_policy,
        }

    request.state.resolve_outcome = "matched"
    record_resolution("matched", result.family, None)
    return {
        "version": result.version,
        "matched": True,
        "family": result.family,
        "resources": [r.to_dict() for r in result.resources],
        "error": None,
        "decision": None,
    }


@router.get("/routes", response_model=RoutesResponseModel)
def list_routes(version: str = "latest", registry: ResolverRegistry = Depends(get_registry)):
    families = _families_or_404(registry, version)
    return {
        "version": version,
        "routes": [
            {"family": fam.name, "method": rule.method, "pattern": rule.expression, "kind": rule.kind}
            for fam in families
            for rule in fam.rules
        ],
    }


@router.get("/versions")
def list_versions(registry: ResolverRegistry = Depends(get_registry)):
    return {"versions": registry.list_versions()}
