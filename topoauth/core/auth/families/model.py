from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..meta import Action, ResourceAttribute, ResourceType
from ..metadata import biz_id_or_warn
from ..patterns import NAME, NUM, ResolverFamily, exact, regex


def create_model(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MODEL,
            action=Action.CREATE,
            business_id=biz_id_or_warn(ctx, "create object"),
        )
    ]


def delete_model(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "delete object"
    ctx.expect_elements(5, op)
    obj_id = ctx.int_element(4, op, "object's id")
    return [
        ResourceAttribute(
            type=ResourceType.MODEL,
            action=Action.DELETE,
            instance_id=obj_id,
            business_id=biz_id_or_warn(ctx, op),
        )
    ]


def update_model(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "update object"
    ctx.expect_elements(5, op)
    obj_id = ctx.int_element(4, op, "object's id")
    return [
        ResourceAttribute(
            type=ResourceType.MODEL,
            action=Action.UPDATE,
            instance_id=obj_id,
            business_id=biz_id_or_warn(ctx, op),
        )
    ]


def find_models(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MODEL,
            action=Action.FIND_MANY,
            business_id=biz_id_or_warn(ctx, "find object"),
        )
    ]


def find_model_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_TOPOLOGY,
            action=Action.FIND,
            business_id=biz_id_or_warn(ctx, "find object topology"),
        )
    ]


def find_model_topology_graphic(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_TOPOLOGY,
            action=Action.SKIP_ACTION,
            business_id=biz_id_or_warn(ctx, "find object topology graphic"),
        )
    ]


def update_model_topology_graphic(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    # graphic layout only; platform-global
    return [ResourceAttribute(type=ResourceType.MODEL_TOPOLOGY, action=Action.SKIP_ACTION)]


FAMILY = ResolverFamily(
    name="model",
    rules=(
        exact("POST", "/create/object", create_model),
        regex("DELETE", f"/delete/object/{NUM}", delete_model),
        regex("PUT", f"/update/object/{NUM}", update_model),
        exact("POST", "/find/object", find_models),
        exact("POST", "/find/objecttopology", find_model_topology),
        regex("POST", f"/find/objecttopo/scope_type/{NAME}/scope_id/{NAME}", find_model_topology_graphic),
        regex("POST", f"/update/objecttopo/scope_type/{NAME}/scope_id/{NAME}", update_model_topology_graphic),
    ),
)
