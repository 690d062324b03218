from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..meta import Action, ResourceAttribute, ResourceType
from ..metadata import biz_id_or_warn
from ..patterns import NUM, ResolverFamily, exact, regex


def _classification(ctx: RequestContext, op: str, action: Action, class_id: int = 0) -> List[ResourceAttribute]:
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_CLASSIFICATION,
            action=action,
            instance_id=class_id,
            business_id=biz_id_or_warn(ctx, op),
        )
    ]


def create_classification(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _classification(ctx, "create object classification", Action.CREATE)


def delete_classification(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "delete object classification"
    ctx.expect_elements(5, op)
    return _classification(ctx, op, Action.DELETE, ctx.int_element(4, op, "classification id"))


def update_classification(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    op = "update object classification"
    ctx.expect_elements(5, op)
    return _classification(ctx, op, Action.UPDATE, ctx.int_element(4, op, "classification id"))


def find_classifications(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _classification(ctx, "find object classification", Action.FIND_MANY)


def find_classified_models(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    # listing the models of each classification is a model read
    return [
        ResourceAttribute(
            type=ResourceType.MODEL,
            action=Action.FIND_MANY,
            business_id=biz_id_or_warn(ctx, "find classification objects"),
        )
    ]


FAMILY = ResolverFamily(
    name="classification",
    rules=(
        exact("POST", "/create/objectclassification", create_classification),
        regex("DELETE", f"/delete/objectclassification/{NUM}", delete_classification),
        regex("PUT", f"/update/objectclassification/{NUM}", update_classification),
        exact("POST", "/find/objectclassification", find_classifications),
        exact("POST", "/find/classificationobject", find_classified_models),
    ),
)
