from __future__ import annotations

from fastapi import Request

from topoauth.core.auth import ResolverRegistry, default_registry
from topoauth.core.config import ServiceSettings
from topoauth.core.gateway import ModelLookupGateway, get_lookup_gateway


def get_settings(request: Request) -> ServiceSettings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = ServiceSettings.from_env()
        request.app.state.settings = settings
    return settings


def get_gateway(request: Request) -> ModelLookupGateway:
    # built on first use so tests can install their own gateway on app.state
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        gateway = get_lookup_gateway(get_settings(request))
        request.app.state.gateway = gateway
    return gateway


def get_registry(request: Request) -> ResolverRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        registry = default_registry()
        request.app.state.registry = registry
    return registry
