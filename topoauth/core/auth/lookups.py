from __future__ import annotations

from typing import Callable, List, TypeVar

from topoauth.core.gateway import (
    AssociationDef,
    Attribute,
    AttributeGroup,
    Condition,
    GatewayError,
    IN_OPERATOR,
    InstanceAssociation,
    ModelLookupGateway,
    Schema,
)

from .errors import ModelLookupError

T = TypeVar("T")

OBJ_ID_FIELD = "bk_obj_id"
ASST_OBJ_ID_FIELD = "bk_asst_obj_id"
OBJ_ASST_ID_FIELD = "bk_obj_asst_id"
ASST_KIND_FIELD = "bk_asst_id"
INST_ID_FIELD = "bk_inst_id"
ASST_INST_ID_FIELD = "bk_asst_inst_id"
ID_FIELD = "id"

MAINLINE_KIND = "bk_mainline"
HOST_OBJ_ID = "host"


def _call(fn: Callable[[Condition], T], cond: Condition, what: str) -> T:
    try:
        return fn(cond)
    except GatewayError as e:
        raise ModelLookupError(f"get {what} by {dict(cond)} failed, err: {e}") from e


def _non_empty(found: List[T], cond: Condition, what: str) -> List[T]:
    if not found:
        raise ModelLookupError(f"{what} {dict(cond)} not found")
    return found


def get_models(gw: ModelLookupGateway, cond: Condition) -> List[Schema]:
    return _non_empty(_call(gw.find_schemas, cond, "model"), cond, "model")


def get_model_associations(gw: ModelLookupGateway, cond: Condition) -> List[AssociationDef]:
    return _non_empty(_call(gw.find_association_defs, cond, "model association"), cond, "model association")


def get_model_attributes(gw: ModelLookupGateway, cond: Condition) -> List[Attribute]:
    return _non_empty(_call(gw.find_attributes, cond, "model attribute"), cond, "model attribute")


def get_attribute_groups(gw: ModelLookupGateway, cond: Condition) -> List[AttributeGroup]:
    return _non_empty(_call(gw.find_attribute_groups, cond, "attribute group"), cond, "attribute group")


def get_instance_association(gw: ModelLookupGateway, cond: Condition) -> InstanceAssociation:
    found = _call(gw.find_instance_association, cond, "instance association")
    if found is None:
        raise ModelLookupError(f"instance association {dict(cond)} not found")
    return found


def get_model(gw: ModelLookupGateway, object_id: str) -> Schema:
    return get_models(gw, {OBJ_ID_FIELD: object_id})[0]


def get_endpoint_models(gw: ModelLookupGateway, source: str, target: str) -> List[Schema]:
    """
    Both endpoint models of an association, source first.

    A self association (source == target) yields a single model.
    """
    wanted = [source] if source == target else [source, target]
    cond = {OBJ_ID_FIELD: {IN_OPERATOR: wanted}}
    by_obj = {m.object_id: m for m in get_models(gw, cond)}
    missing = [obj for obj in wanted if obj not in by_obj]
    if missing:
        raise ModelLookupError(f"model {missing} not found")
    return [by_obj[obj] for obj in wanted]


def is_mainline_model(gw: ModelLookupGateway, object_id: str) -> bool:
    """A model is on the mainline when it is the child side of a bk_mainline association."""
    if object_id == HOST_OBJ_ID:
        return False
    mainline = _call(gw.find_association_defs, {ASST_KIND_FIELD: MAINLINE_KIND}, "mainline association")
    return any(asst.object_id == object_id for asst in mainline)
