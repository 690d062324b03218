"""
Model instances.

Instances of mainline models (the biz -> set -> module hierarchy) are
authorized per business: their scope comes from the caller's metadata and
must be present, and their type is MainlineInstance. Every other instance
takes the business scope stored on its model.
"""
from __future__ import annotations

from typing import Any, List, Tuple

from topoauth.core.gateway import ModelLookupGateway, Schema

from ..context import RequestContext, parse_id
from ..errors import ParameterError
from ..lookups import get_model, is_mainline_model
from ..meta import Action, Item, ResourceAttribute, ResourceType, model_layer
from ..metadata import biz_id_or_warn, required_biz_id, schema_biz_id
from ..patterns import NAME, NUM, ResolverFamily, regex


def _instance_scope(ctx: RequestContext, gw: ModelLookupGateway, model: Schema, op: str) -> Tuple[ResourceType, int]:
    if is_mainline_model(gw, model.object_id):
        return ResourceType.MAINLINE_INSTANCE, required_biz_id(ctx, f"{op} of mainline instance")
    return ResourceType.MODEL_INSTANCE, schema_biz_id(model)


def _instance(ctx: RequestContext, gw: ModelLookupGateway, op: str, action: Action, inst_id: int = 0) -> List[ResourceAttribute]:
    model = get_model(gw, ctx.element(5))
    res_type, biz_id = _instance_scope(ctx, gw, model, op)
    return [
        ResourceAttribute(
            type=res_type,
            action=action,
            instance_id=inst_id,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
    ]


def _many(model: Schema, res_type: ResourceType, action: Action, biz_id: int, ids: List[int]) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=res_type,
            action=action,
            instance_id=inst_id,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
        for inst_id in ids
    ]


def _batch_update_ids(ctx: RequestContext, op: str) -> List[int]:
    items = ctx.body.get("update")
    if not isinstance(items, list) or not items:
        raise ParameterError(f"{op}, but update list is missing in request body")
    ids: List[int] = []
    for item in items:
        if not isinstance(item, dict):
            raise ParameterError(f"{op}, but got invalid update item")
        ids.append(parse_id(item.get("inst_id"), f"{op}, but got invalid instance id"))
    return ids


def _batch_delete_ids(ctx: RequestContext, op: str) -> List[int]:
    """Empty when the request deletes by condition rather than by ids."""
    option: Any = ctx.body.get("delete")
    if option is None:
        return []
    if not isinstance(option, dict):
        raise ParameterError(f"{op}, but got invalid delete option")
    raw_ids = option.get("inst_ids")
    if raw_ids is None:
        return []
    if not isinstance(raw_ids, list):
        raise ParameterError(f"{op}, but inst_ids must be a list")
    return [parse_id(v, f"{op}, but got invalid instance id") for v in raw_ids]


def create_instance(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _instance(ctx, gw, "create object instance", Action.CREATE)


def find_instance_association(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "search object instance association"
    ctx.expect_elements(6, op)
    model = get_model(gw, ctx.element(5))
    res_type = ResourceType.MAINLINE_INSTANCE if is_mainline_model(gw, model.object_id) else ResourceType.MODEL_INSTANCE
    return [
        ResourceAttribute(
            type=res_type,
            action=Action.FIND,
            business_id=schema_biz_id(model),
            layers=model_layer(model.id),
        )
    ]


def update_instance(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "update object instance"
    ctx.expect_elements(8, op)
    inst_id = ctx.int_element(7, op, "instance id")
    return _instance(ctx, gw, op, Action.UPDATE, inst_id)


def update_instance_batch(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "update object instance batch"
    ctx.expect_elements(6, op)
    model = get_model(gw, ctx.element(5))
    ids = _batch_update_ids(ctx, op)
    res_type, biz_id = _instance_scope(ctx, gw, model, op)
    return _many(model, res_type, Action.UPDATE_MANY, biz_id, ids)


def delete_instance_batch(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "delete object instance batch"
    ctx.expect_elements(6, op)
    model = get_model(gw, ctx.element(5))
    ids = _batch_delete_ids(ctx, op)
    res_type, biz_id = _instance_scope(ctx, gw, model, op)
    # no ids: one collection-level descriptor for the whole model
    return _many(model, res_type, Action.DELETE_MANY, biz_id, ids or [0])


def delete_instance(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "delete object instance"
    ctx.expect_elements(8, op)
    inst_id = ctx.int_element(7, op, "instance id")
    return _instance(ctx, gw, op, Action.DELETE, inst_id)


def find_instance_sub_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "find object instance topology"
    ctx.expect_elements(8, op)
    inst_id = ctx.int_element(7, op, "instance id")
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_INSTANCE_TOPOLOGY,
            action=Action.FIND,
            instance_id=inst_id,
            layers=(Item(type=ResourceType.MODEL, name=ctx.element(5)),),
        )
    ]


def find_instance_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    ctx.expect_elements(8, "find object instance topology")
    return [ResourceAttribute(type=ResourceType.MODEL_INSTANCE_TOPOLOGY, action=Action.FIND)]


def find_business_instance_topology(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "find business instance topology"
    ctx.expect_elements(6, op)
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_INSTANCE_TOPOLOGY,
            action=Action.FIND,
            business_id=biz_id_or_warn(ctx, op),
        )
    ]


def find_instances(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    ctx.expect_elements(6, "find object's instance list")
    model = get_model(gw, ctx.element(5))
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_INSTANCE,
            action=Action.FIND_MANY,
            business_id=schema_biz_id(model),
            layers=model_layer(model.id),
        )
    ]


FAMILY = ResolverFamily(
    name="model_instance",
    rules=(
        regex("POST", f"/create/instance/object/{NAME}", create_instance),
        regex("POST", f"/find/instassociation/object/{NAME}", find_instance_association),
        regex("PUT", f"/update/instance/object/{NAME}/inst/{NUM}", update_instance),
        regex("PUT", f"/updatemany/instance/object/{NAME}", update_instance_batch),
        regex("DELETE", f"/deletemany/instance/object/{NAME}", delete_instance_batch),
        regex("DELETE", f"/delete/instance/object/{NAME}/inst/{NUM}", delete_instance),
        regex("POST", f"/find/insttopo/object/{NAME}/inst/{NUM}", find_instance_sub_topology),
        regex("POST", f"/find/instassttopo/object/{NAME}/inst/{NUM}", find_instance_topology),
        # POST only; the GET form of this path belongs to the mainline family
        regex("POST", f"/find/topoinst/biz/{NUM}", find_business_instance_topology),
        regex("POST", f"/find/instance/object/{NAME}", find_instances),
    ),
)
