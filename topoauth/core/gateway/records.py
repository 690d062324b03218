from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Mapping


@dataclass(frozen=True)
class Schema:
    id: int
    object_id: str
    name: str = ""
    classification_id: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict)

    FIELDS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "bk_obj_id": "object_id",
        "bk_obj_name": "name",
        "bk_classification_id": "classification_id",
        "metadata": "metadata",
    }


@dataclass(frozen=True)
class AssociationDef:
    id: int
    association_name: str
    object_id: str
    asst_object_id: str
    asst_kind_id: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict)

    FIELDS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "bk_obj_asst_id": "association_name",
        "bk_obj_id": "object_id",
        "bk_asst_obj_id": "asst_object_id",
        "bk_asst_id": "asst_kind_id",
        "metadata": "metadata",
    }


@dataclass(frozen=True)
class Attribute:
    id: int
    object_id: str
    property_id: str
    property_group: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict)

    FIELDS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "bk_obj_id": "object_id",
        "bk_property_id": "property_id",
        "bk_property_group": "property_group",
        "metadata": "metadata",
    }


@dataclass(frozen=True)
class AttributeGroup:
    id: int
    object_id: str
    group_id: str
    group_name: str = ""
    metadata: Mapping[str, Any] = field(default_factory=dict)

    FIELDS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "bk_obj_id": "object_id",
        "bk_group_id": "group_id",
        "bk_group_name": "group_name",
        "metadata": "metadata",
    }


@dataclass(frozen=True)
class InstanceAssociation:
    id: int
    obj_asst_id: str
    object_id: str
    inst_id: int
    asst_object_id: str
    asst_inst_id: int
    asst_kind_id: str = ""

    FIELDS: ClassVar[Dict[str, str]] = {
        "id": "id",
        "bk_obj_asst_id": "obj_asst_id",
        "bk_obj_id": "object_id",
        "bk_inst_id": "inst_id",
        "bk_asst_obj_id": "asst_object_id",
        "bk_asst_inst_id": "asst_inst_id",
        "bk_asst_id": "asst_kind_id",
    }


def record_from_dict(cls, data: Mapping[str, Any]):
    """Build a record from a platform-shaped dict (bk_* keys); unknown keys are ignored."""
    kwargs: Dict[str, Any] = {}
    for key, attr in cls.FIELDS.items():
        if key in data:
            kwargs[attr] = data[key]
    if "id" in kwargs:
        kwargs["id"] = int(kwargs["id"])
    for attr in ("inst_id", "asst_inst_id"):
        if attr in kwargs:
            kwargs[attr] = int(kwargs[attr])
    return cls(**kwargs)
