"""
Instance-to-instance associations.

An instance edge is authorized as an Update on both endpoint instances, each
layered under its own model. The role (source/target) of each endpoint comes
from the association definition.
"""
from __future__ import annotations

from typing import List, Tuple

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..lookups import (
    ASST_INST_ID_FIELD,
    ID_FIELD,
    INST_ID_FIELD,
    OBJ_ASST_ID_FIELD,
    get_endpoint_models,
    get_instance_association,
    get_model_associations,
)
from ..meta import Action, ResourceAttribute, ResourceType, model_layer
from ..metadata import strict_biz_id
from ..patterns import NUM, ResolverFamily, exact, regex


def _update_endpoint_instances(
    gw: ModelLookupGateway,
    source: Tuple[str, int],
    target: Tuple[str, int],
    biz_id: int,
) -> List[ResourceAttribute]:
    models = {m.object_id: m for m in get_endpoint_models(gw, source[0], target[0])}
    resources = [
        ResourceAttribute(
            type=ResourceType.MODEL_INSTANCE,
            action=Action.UPDATE,
            instance_id=inst_id,
            business_id=biz_id,
            layers=model_layer(models[obj_id].id),
        )
        for obj_id, inst_id in (source, target)
    ]
    # an instance associated with itself is checked once
    return list(dict.fromkeys(resources))


def find_instance_associations(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    biz_id = strict_biz_id(ctx)
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_INSTANCE_ASSOCIATION,
            action=Action.FIND_MANY,
            business_id=biz_id,
        )
    ]


def create_instance_association(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "create instance association"
    biz_id = strict_biz_id(ctx)
    asst_name = ctx.body_field(OBJ_ASST_ID_FIELD, op)
    asst = get_model_associations(gw, {OBJ_ASST_ID_FIELD: str(asst_name)})[0]
    inst_id = ctx.body_int(INST_ID_FIELD, op)
    asst_inst_id = ctx.body_int(ASST_INST_ID_FIELD, op)
    return _update_endpoint_instances(
        gw,
        (asst.object_id, inst_id),
        (asst.asst_object_id, asst_inst_id),
        biz_id,
    )


def delete_instance_association(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "delete object instance association"
    asst_id = ctx.int_element(4, op, "association id")
    biz_id = strict_biz_id(ctx)
    asst = get_instance_association(gw, {ID_FIELD: asst_id})
    return _update_endpoint_instances(
        gw,
        (asst.object_id, asst.inst_id),
        (asst.asst_object_id, asst.asst_inst_id),
        biz_id,
    )


FAMILY = ResolverFamily(
    name="instance_association",
    rules=(
        exact("POST", "/find/instassociation", find_instance_associations),
        exact("POST", "/create/instassociation", create_instance_association),
        regex("DELETE", f"/delete/instassociation/{NUM}", delete_instance_association),
    ),
)
