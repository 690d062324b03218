from __future__ import annotations

from pathlib import Path

from topoauth.core.config import ServiceSettings

from .base import IN_OPERATOR, Condition, GatewayError, ModelLookupGateway
from .core_service import CoreServiceLookupGateway
from .memory import InMemoryLookupGateway
from .records import AssociationDef, Attribute, AttributeGroup, InstanceAssociation, Schema


def get_lookup_gateway(settings: ServiceSettings) -> ModelLookupGateway:
    if settings.lookup_mode == "core_service":
        return CoreServiceLookupGateway(settings.core_url or "", timeout_seconds=settings.core_timeout_seconds)

    if settings.lookup_fixture:
        return InMemoryLookupGateway.from_file(Path(settings.lookup_fixture))

    # no records: every anchored lookup resolves as not found (deny)
    return InMemoryLookupGateway()


__all__ = [
    "AssociationDef",
    "Attribute",
    "AttributeGroup",
    "Condition",
    "CoreServiceLookupGateway",
    "GatewayError",
    "IN_OPERATOR",
    "InMemoryLookupGateway",
    "InstanceAssociation",
    "ModelLookupGateway",
    "Schema",
    "get_lookup_gateway",
]
