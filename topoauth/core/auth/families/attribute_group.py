"""
Attribute groups, always layered under their owning model.

Detaching an attribute from a group removes a membership, not the group, so
it is a Delete keyed by the attribute's property id.
"""
from __future__ import annotations

from typing import List, Mapping

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..errors import ParameterError
from ..lookups import ID_FIELD, OBJ_ID_FIELD, get_attribute_groups, get_model
from ..meta import Action, ResourceAttribute, ResourceType, model_layer
from ..metadata import biz_id_or_warn
from ..patterns import NAME, NUM, ResolverFamily, exact, regex


def create_group(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "create object attribute group"
    biz_id = biz_id_or_warn(ctx, op)
    model = get_model(gw, str(ctx.body_field(OBJ_ID_FIELD, op)))
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE_GROUP,
            action=Action.CREATE,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
    ]


def find_groups(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "find object's attribute group"
    ctx.expect_elements(6, op)
    model = get_model(gw, ctx.element(5))
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE_GROUP,
            action=Action.FIND_MANY,
            business_id=biz_id_or_warn(ctx, op),
            layers=model_layer(model.id),
        )
    ]


def update_groups(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "update object attribute group"
    biz_id = biz_id_or_warn(ctx, op)
    cond = ctx.body.get("condition")
    if not isinstance(cond, Mapping) or not cond:
        raise ParameterError(f"{op}, but condition is missing in request body")

    resources = []
    for group in get_attribute_groups(gw, cond):
        model = get_model(gw, group.object_id)
        resources.append(
            ResourceAttribute(
                type=ResourceType.MODEL_ATTRIBUTE_GROUP,
                action=Action.UPDATE,
                instance_id=group.id,
                business_id=biz_id,
                layers=model_layer(model.id),
            )
        )
    return resources


def delete_group(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "delete object's attribute group"
    ctx.expect_elements(5, op)
    group_id = ctx.int_element(4, op, "group's id")
    biz_id = biz_id_or_warn(ctx, op)
    group = get_attribute_groups(gw, {ID_FIELD: group_id})[0]
    model = get_model(gw, group.object_id)
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE_GROUP,
            action=Action.DELETE,
            instance_id=group_id,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
    ]


def remove_attribute_from_group(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "remove a object attribute away from a group"
    ctx.expect_elements(10, op)
    biz_id = biz_id_or_warn(ctx, op)
    model = get_model(gw, ctx.element(5))
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE_GROUP,
            action=Action.DELETE,
            name=ctx.element(7),
            business_id=biz_id,
            layers=model_layer(model.id),
        )
    ]


FAMILY = ResolverFamily(
    name="attribute_group",
    rules=(
        exact("POST", "/create/objectattgroup", create_group),
        regex("POST", f"/find/objectattgroup/object/{NAME}", find_groups),
        exact("PUT", "/update/objectattgroup", update_groups),
        regex("DELETE", f"/delete/objectattgroup/{NUM}", delete_group),
        regex(
            "DELETE",
            f"/delete/objectattgroupasst/object/{NAME}/property/{NAME}/group/{NAME}",
            remove_attribute_from_group,
        ),
    ),
)
