"""
Model-to-model associations.

Creating, changing or removing an association definition is authorized as an
Update on each endpoint model, never on the edge itself.
"""
from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..lookups import (
    ASST_OBJ_ID_FIELD,
    ID_FIELD,
    OBJ_ID_FIELD,
    get_endpoint_models,
    get_model_associations,
)
from ..meta import Action, ResourceAttribute, ResourceType
from ..metadata import biz_id_or_warn
from ..patterns import NUM, ResolverFamily, exact, regex


def _update_endpoints(gw: ModelLookupGateway, source: str, target: str, biz_id: int) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MODEL,
            action=Action.UPDATE,
            instance_id=model.id,
            business_id=biz_id,
        )
        for model in get_endpoint_models(gw, source, target)
    ]


def find_associations(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return [ResourceAttribute(type=ResourceType.MODEL_ASSOCIATION, action=Action.FIND_MANY)]


def create_association(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "create object association"
    biz_id = biz_id_or_warn(ctx, op)
    source = ctx.body_field(OBJ_ID_FIELD, op)
    target = ctx.body_field(ASST_OBJ_ID_FIELD, op)
    return _update_endpoints(gw, str(source), str(target), biz_id)


def _by_association_id(ctx: RequestContext, gw: ModelLookupGateway, op: str) -> List[ResourceAttribute]:
    biz_id = biz_id_or_warn(ctx, op)
    ctx.expect_elements(5, op)
    asst_id = ctx.int_element(4, op, "association id")
    asst = get_model_associations(gw, {ID_FIELD: asst_id})[0]
    return _update_endpoints(gw, asst.object_id, asst.asst_object_id, biz_id)


def update_association(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _by_association_id(ctx, gw, "update object association")


def delete_association(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _by_association_id(ctx, gw, "delete object association")


FAMILY = ResolverFamily(
    name="model_association",
    rules=(
        exact("POST", "/find/objectassociation", find_associations),
        exact("POST", "/create/objectassociation", create_association),
        regex("PUT", f"/update/objectassociation/{NUM}", update_association),
        regex("DELETE", f"/delete/objectassociation/{NUM}", delete_association),
        # association list filtered by association kinds
        exact("POST", "/find/topoassociationtype", find_associations),
    ),
)
