from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..lookups import ID_FIELD, OBJ_ID_FIELD, get_model, get_model_attributes, get_models
from ..meta import Action, ResourceAttribute, ResourceType, model_layer
from ..metadata import biz_id_or_warn
from ..patterns import NUM, ResolverFamily, exact, regex


def create_attribute(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "create object attribute"
    biz_id = biz_id_or_warn(ctx, op)
    model = get_model(gw, str(ctx.body_field(OBJ_ID_FIELD, op)))
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE,
            action=Action.CREATE,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
    ]


def _by_attribute_id(ctx: RequestContext, gw: ModelLookupGateway, op: str, action: Action) -> List[ResourceAttribute]:
    ctx.expect_elements(5, op)
    attr_id = ctx.int_element(4, op, "attribute id")
    # the owning model is only known through the attribute record
    attr = get_model_attributes(gw, {ID_FIELD: attr_id})[0]
    model = get_model(gw, attr.object_id)
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE,
            action=action,
            instance_id=attr_id,
            business_id=biz_id_or_warn(ctx, op),
            layers=model_layer(model.id),
        )
    ]


def delete_attribute(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _by_attribute_id(ctx, gw, "delete object attribute", Action.DELETE)


def update_attribute(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _by_attribute_id(ctx, gw, "update object attribute", Action.UPDATE)


def find_attributes(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "find object attribute"
    biz_id = biz_id_or_warn(ctx, op)
    # bk_obj_id may be a plain model id or an {"$in": [...]} condition
    models = get_models(gw, {OBJ_ID_FIELD: ctx.body_field(OBJ_ID_FIELD, op)})
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_ATTRIBUTE,
            action=Action.FIND_MANY,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
        for model in models
    ]


FAMILY = ResolverFamily(
    name="attribute",
    rules=(
        exact("POST", "/create/objectattr", create_attribute),
        regex("DELETE", f"/delete/objectattr/{NUM}", delete_attribute),
        regex("PUT", f"/update/objectattr/{NUM}", update_attribute),
        exact("POST", "/find/objectattr", find_attributes),
    ),
)
