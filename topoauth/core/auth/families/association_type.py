"""Association kinds are platform-global: no business scope, no layers."""
from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..meta import Action, ResourceAttribute, ResourceType
from ..patterns import NUM, ResolverFamily, exact, regex


def find_kinds(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [ResourceAttribute(type=ResourceType.ASSOCIATION_TYPE, action=Action.FIND_MANY)]


def create_kind(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [ResourceAttribute(type=ResourceType.ASSOCIATION_TYPE, action=Action.CREATE)]


def update_kind(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    kind_id = ctx.int_element(4, "update association kind", "kind id")
    return [ResourceAttribute(type=ResourceType.ASSOCIATION_TYPE, action=Action.UPDATE, instance_id=kind_id)]


def delete_kind(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    kind_id = ctx.int_element(4, "delete association kind", "kind id")
    return [ResourceAttribute(type=ResourceType.ASSOCIATION_TYPE, action=Action.DELETE, instance_id=kind_id)]


FAMILY = ResolverFamily(
    name="association_type",
    rules=(
        exact("POST", "/find/associationtype", find_kinds),
        exact("POST", "/create/associationtype", create_kind),
        regex("PUT", f"/update/associationtype/{NUM}", update_kind),
        regex("DELETE", f"/delete/associationtype/{NUM}", delete_kind),
    ),
)
