"""
Mainline topology (biz -> set -> module).

Adding or removing a mainline level changes the hierarchy itself and is
authorized as MainlineModel, separately from instance authorization.
"""
from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..meta import Action, ResourceAttribute, ResourceType
from ..metadata import biz_id_or_warn
from ..patterns import NAME, NUM, ResolverFamily, exact, regex


def create_mainline_model(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MAINLINE_MODEL,
            action=Action.CREATE,
            business_id=biz_id_or_warn(ctx, "create mainline object"),
        )
    ]


def delete_mainline_model(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MAINLINE_MODEL,
            action=Action.DELETE,
            name=ctx.element(5),
            business_id=biz_id_or_warn(ctx, "delete mainline object"),
        )
    ]


def find_mainline_model_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MAINLINE_MODEL_TOPOLOGY,
            action=Action.SKIP_ACTION,
            business_id=biz_id_or_warn(ctx, "find mainline object topology"),
        )
    ]


def find_mainline_instance_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    # TODO: the path also carries a biz id; scope stays on metadata until the two are reconciled upstream.
    return [
        ResourceAttribute(
            type=ResourceType.MAINLINE_INSTANCE_TOPOLOGY,
            action=Action.FIND,
            business_id=biz_id_or_warn(ctx, "find mainline instance topology"),
        )
    ]


def find_mainline_sub_instance_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "find mainline object's sub instance topology"
    ctx.expect_elements(9, op)
    return [
        ResourceAttribute(
            type=ResourceType.MAINLINE_INSTANCE_TOPOLOGY,
            action=Action.FIND,
            business_id=ctx.int_element(6, op, "business id"),
        )
    ]


def find_idle_fault_modules(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "find mainline idle and fault module"
    ctx.expect_elements(6, op)
    return [
        ResourceAttribute(
            type=ResourceType.MAINLINE_MODEL,
            action=Action.FIND,
            business_id=ctx.int_element(5, op, "business id"),
        )
    ]


FAMILY = ResolverFamily(
    name="mainline",
    rules=(
        exact("POST", "/create/topomodelmainline", create_mainline_model),
        regex("DELETE", f"/delete/topomodelmainline/object/{NAME}", delete_mainline_model),
        exact("POST", "/find/topomodelmainline", find_mainline_model_topology),
        regex("GET", f"/find/topoinst/biz/{NUM}", find_mainline_instance_topology),
        regex("GET", f"/topoinstchild/object/{NAME}/biz/{NUM}/inst/{NUM}", find_mainline_sub_instance_topology),
        regex("GET", f"/find/topointernal/biz/{NUM}", find_idle_fault_modules),
    ),
)
