from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from topoauth.core.gateway import ModelLookupGateway

from .context import RequestContext, ResolveResult
from .errors import ResolveError
from .families import LATEST_FAMILIES
from .patterns import ResolverFamily

log = logging.getLogger("topoauth.resolve")

LATEST_VERSION = "latest"


def resolve(
    ctx: RequestContext,
    gateway: ModelLookupGateway,
    families: Sequence[ResolverFamily] = LATEST_FAMILIES,
    *,
    version: str = LATEST_VERSION,
) -> ResolveResult:
    """
    Fold the request through the ordered families.

    Stops at the first family whose rule matches: its descriptors (or its
    failure) are the result. No match anywhere means the route is unmatched.
    """
    for family in families:
        rule = family.match(ctx)
        if rule is None:
            continue

        try:
            resources = tuple(rule.handler(ctx, gateway))
        except ResolveError as e:
            log.info(
                "resolve failed family=%s kind=%s method=%s path=%s err=%s",
                family.name,
                e.kind,
                ctx.method,
                ctx.uri,
                e,
            )
            return ResolveResult(failure=e, matched=True, family=family.name, version=version)

        log.info(
            "resolve matched family=%s method=%s path=%s resources=%d",
            family.name,
            ctx.method,
            ctx.uri,
            len(resources),
        )
        return ResolveResult(resources=resources, matched=True, family=family.name, version=version)

    log.info("resolve unmatched method=%s path=%s", ctx.method, ctx.uri)
    return ResolveResult(version=version)


class ResolverRegistry:
    """
    API version -> ordered families.

    The elder API version is not part of the default registry; a deployment
    that still serves it registers its own families under its own name.
    """

    def __init__(self):
        self._versions: Dict[str, Tuple[ResolverFamily, ...]] = {}

    def register(self, version: str, families: Sequence[ResolverFamily]) -> None:
        if not version:
            raise ValueError("version name is required")
        if version in self._versions:
            raise ValueError(f"version already registered: {version}")
        self._versions[version] = tuple(families)

    def families(self, version: str) -> Tuple[ResolverFamily, ...]:
        try:
            return self._versions[version]
        except KeyError:
            raise KeyError(f"Unknown api version: {version}")

    def list_versions(self) -> List[str]:
        return sorted(self._versions.keys())

    def resolve(self, ctx: RequestContext, gateway: ModelLookupGateway, version: str = LATEST_VERSION) -> ResolveResult:
        return resolve(ctx, gateway, self.families(version), version=version)


def default_registry() -> ResolverRegistry:
    reg = ResolverRegistry()
    reg.register(LATEST_VERSION, LATEST_FAMILIES)
    return reg
