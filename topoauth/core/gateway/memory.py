"""
In-memory lookup gateway.

Holds immutable record tuples; used by tests and by deployments that feed
the resolver from a static fixture file instead of the core service.

Fixture file format (YAML or JSON):
    schemas:
      - {id: 7, bk_obj_id: host, metadata: {label: {bk_biz_id: "0"}}}
    association_defs:
      - {id: 1, bk_obj_asst_id: set_bk_mainline_biz, bk_obj_id: set, bk_asst_obj_id: biz, bk_asst_id: bk_mainline}
    attributes: [...]
    attribute_groups: [...]
    instance_associations: [...]
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple, TypeVar

import yaml

from .base import IN_OPERATOR, Condition, GatewayError
from .records import (
    AssociationDef,
    Attribute,
    AttributeGroup,
    InstanceAssociation,
    Schema,
    record_from_dict,
)

_log = logging.getLogger("topoauth.gateway.memory")

R = TypeVar("R")

_SECTIONS = {
    "schemas": Schema,
    "association_defs": AssociationDef,
    "attributes": Attribute,
    "attribute_groups": AttributeGroup,
    "instance_associations": InstanceAssociation,
}


def _equal(stored: Any, wanted: Any) -> bool:
    if stored == wanted:
        return True
    # ids arrive as strings from paths and bodies
    if isinstance(stored, int) and isinstance(wanted, str) and re.fullmatch(r"[0-9]+", wanted.strip()):
        return stored == int(wanted)
    return False


def _matches(record: Any, cond: Condition) -> bool:
    fields = type(record).FIELDS
    for key, wanted in cond.items():
        attr = fields.get(key)
        if attr is None:
            raise GatewayError(f"unsupported condition field {key!r} for {type(record).__name__}")
        stored = getattr(record, attr)

        if isinstance(wanted, Mapping):
            unknown = set(wanted) - {IN_OPERATOR}
            if unknown:
                raise GatewayError(f"unsupported condition operator(s) {sorted(unknown)} on {key!r}")
            candidates = wanted.get(IN_OPERATOR) or []
            if not isinstance(candidates, (list, tuple)):
                raise GatewayError(f"{IN_OPERATOR} on {key!r} expects a list")
            if not any(_equal(stored, c) for c in candidates):
                return False
            continue

        if not _equal(stored, wanted):
            return False
    return True


class InMemoryLookupGateway:
    def __init__(
        self,
        *,
        schemas: Iterable[Schema] = (),
        association_defs: Iterable[AssociationDef] = (),
        attributes: Iterable[Attribute] = (),
        attribute_groups: Iterable[AttributeGroup] = (),
        instance_associations: Iterable[InstanceAssociation] = (),
    ):
        self._schemas: Tuple[Schema, ...] = tuple(schemas)
        self._association_defs: Tuple[AssociationDef, ...] = tuple(association_defs)
        self._attributes: Tuple[Attribute, ...] = tuple(attributes)
        self._attribute_groups: Tuple[AttributeGroup, ...] = tuple(attribute_groups)
        self._instance_associations: Tuple[InstanceAssociation, ...] = tuple(instance_associations)

    @staticmethod
    def _select(records: Tuple[R, ...], cond: Condition) -> List[R]:
        if not isinstance(cond, Mapping):
            raise GatewayError("lookup condition must be a mapping")
        return [r for r in records if _matches(r, cond)]

    def find_schemas(self, cond: Condition) -> List[Schema]:
        return self._select(self._schemas, cond)

    def find_association_defs(self, cond: Condition) -> List[AssociationDef]:
        return self._select(self._association_defs, cond)

    def find_attributes(self, cond: Condition) -> List[Attribute]:
        return self._select(self._attributes, cond)

    def find_attribute_groups(self, cond: Condition) -> List[AttributeGroup]:
        return self._select(self._attribute_groups, cond)

    def find_instance_association(self, cond: Condition) -> Optional[InstanceAssociation]:
        found = self._select(self._instance_associations, cond)
        return found[0] if found else None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "InMemoryLookupGateway":
        kwargs = {}
        for section, record_cls in _SECTIONS.items():
            rows = data.get(section) or []
            if not isinstance(rows, list):
                raise GatewayError(f"fixture section {section!r} must be a list")
            try:
                kwargs[section] = [record_from_dict(record_cls, row) for row in rows]
            except (TypeError, ValueError) as e:
                raise GatewayError(f"invalid record in fixture section {section!r}: {e}") from e
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Path) -> "InMemoryLookupGateway":
        try:
            raw_text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise GatewayError(f"cannot read lookup fixture {path}: {e}") from e

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError:
            try:
                data = yaml.safe_load(raw_text)
            except yaml.YAMLError as e:
                raise GatewayError(f"lookup fixture {path} is neither JSON nor YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise GatewayError(f"lookup fixture {path} must be a mapping, got {type(data).__name__}")

        gw = cls.from_mapping(data)
        _log.info(
            "Loaded lookup fixture %s schemas=%d association_defs=%d",
            path,
            len(gw._schemas),
            len(gw._association_defs),
        )
        return gw
