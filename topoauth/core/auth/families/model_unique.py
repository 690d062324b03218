from __future__ import annotations

from typing import List

from topoauth.core.gateway import ModelLookupGateway

from ..context import RequestContext
from ..lookups import get_model
from ..meta import Action, ResourceAttribute, ResourceType, model_layer
from ..metadata import strict_biz_id
from ..patterns import NAME, NUM, ResolverFamily, regex


def _unique(ctx: RequestContext, gw: ModelLookupGateway, action: Action, unique_id: int = 0) -> List[ResourceAttribute]:
    biz_id = strict_biz_id(ctx)
    model = get_model(gw, ctx.element(5))
    return [
        ResourceAttribute(
            type=ResourceType.MODEL_UNIQUE,
            action=action,
            instance_id=unique_id,
            business_id=biz_id,
            layers=model_layer(model.id),
        )
    ]


def create_unique(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _unique(ctx, gw, Action.CREATE)


def update_unique(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    unique_id = ctx.int_element(7, "update object unique", "unique id")
    return _unique(ctx, gw, Action.UPDATE, unique_id)


def delete_unique(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    unique_id = ctx.int_element(7, "delete object unique", "unique id")
    return _unique(ctx, gw, Action.DELETE, unique_id)


def find_unique(ctx: RequestContext, gw: ModelLookupGateway) -> List[ResourceAttribute]:
    return _unique(ctx, gw, Action.FIND_MANY)


FAMILY = ResolverFamily(
    name="model_unique",
    rules=(
        regex("POST", f"/create/objectunique/object/{NAME}", create_unique),
        regex("PUT", f"/update/objectunique/object/{NAME}/unique/{NUM}", update_unique),
        # the platform deletes uniques with POST
        regex("POST", f"/delete/objectunique/object/{NAME}/unique/{NUM}", delete_unique),
        regex("POST", f"/find/objectunique/object/{NAME}", find_unique),
    ),
)
