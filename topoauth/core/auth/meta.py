from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class ResourceType(str, Enum):
    MODEL = "model"
    MODEL_ATTRIBUTE = "modelAttribute"
    MODEL_ATTRIBUTE_GROUP = "modelAttributeGroup"
    MODEL_CLASSIFICATION = "modelClassification"
    MODEL_ASSOCIATION = "modelAssociation"
    MODEL_UNIQUE = "modelUnique"
    MODEL_INSTANCE = "modelInstance"
    MAINLINE_INSTANCE = "mainlineInstance"
    MODEL_INSTANCE_ASSOCIATION = "modelInstanceAssociation"
    MODEL_TOPOLOGY = "modelTopology"
    MODEL_INSTANCE_TOPOLOGY = "modelInstanceTopology"
    MAINLINE_MODEL = "mainlineModel"
    MAINLINE_MODEL_TOPOLOGY = "mainlineModelTopology"
    MAINLINE_INSTANCE_TOPOLOGY = "mainlineInstanceTopology"
    ASSOCIATION_TYPE = "associationType"


class Action(str, Enum):
    CREATE = "create"
    FIND = "find"
    FIND_MANY = "findMany"
    UPDATE = "update"
    UPDATE_MANY = "updateMany"
    DELETE = "delete"
    DELETE_MANY = "deleteMany"
    SKIP_ACTION = "skip"


@dataclass(frozen=True)
class Item:
    """One ancestor scoping reference (outermost first in a layer list)."""

    type: ResourceType
    instance_id: int = 0
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "instance_id": self.instance_id, "name": self.name}


@dataclass(frozen=True)
class ResourceAttribute:
    """
    A typed, scoped reference the policy engine authorizes against.

    instance_id == 0 means collection level; business_id == 0 means platform-global.
    """

    type: ResourceType
    action: Action
    instance_id: int = 0
    name: str = ""
    business_id: int = 0
    layers: Tuple[Item, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "action": self.action.value,
            "instance_id": self.instance_id,
            "name": self.name,
            "business_id": self.business_id,
            "layers": [layer.to_dict() for layer in self.layers],
        }


def model_layer(model_id: int) -> Tuple[Item, ...]:
    return (Item(type=ResourceType.MODEL, instance_id=model_id),)
