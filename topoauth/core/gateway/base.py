from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, runtime_checkable

from .records import AssociationDef, Attribute, AttributeGroup, InstanceAssociation, Schema

Condition = Mapping[str, Any]

IN_OPERATOR = "$in"


class GatewayError(Exception):
    """Transport or storage failure while querying lookup records."""


@runtime_checkable
class ModelLookupGateway(Protocol):
    """
    Read-only record lookups used while resolving a request.

    Conditions are keyed by platform field names; a value is either a literal
    or {"$in": [...]}. An empty list (or None for the instance association)
    means not found; failures raise GatewayError. Implementations must be safe
    for concurrent reads.
    """

    def find_schemas(self, cond: Condition) -> List[Schema]:
        ...

    def find_association_defs(self, cond: Condition) -> List[AssociationDef]:
        ...

    def find_attributes(self, cond: Condition) -> List[Attribute]:
        ...

    def find_attribute_groups(self, cond: Condition) -> List[AttributeGroup]:
        ...

    def find_instance_association(self, cond: Condition) -> Optional[InstanceAssociation]:
        ...
