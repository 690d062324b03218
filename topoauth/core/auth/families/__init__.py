from __future__ import annotations

from typing import Tuple

from ..patterns import ResolverFamily
from . import (
    association_type,
    attribute,
    attribute_group,
    classification,
    instance_association,
    mainline,
    model,
    model_association,
    model_instance,
    model_unique,
)

# Ordered: earlier families take precedence where path shapes could overlap.
LATEST_FAMILIES: Tuple[ResolverFamily, ...] = (
    model_unique.FAMILY,
    association_type.FAMILY,
    model_association.FAMILY,
    instance_association.FAMILY,
    model_instance.FAMILY,
    model.FAMILY,
    classification.FAMILY,
    attribute_group.FAMILY,
    attribute.FAMILY,
    mainline.FAMILY,
)

__all__ = ["LATEST_FAMILIES"]
