"""
Lookup gateway backed by the platform core service read APIs.

Every read is a POST with {"condition": {...}} and answers with the
platform envelope:
  {"result": true, "message": "", "data": {"count": n, "info": [...]}}
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .base import Condition, GatewayError
from .records import (
    AssociationDef,
    Attribute,
    AttributeGroup,
    InstanceAssociation,
    Schema,
    record_from_dict,
)

log = logging.getLogger("topoauth.gateway.core")

READ_MODEL_PATH = "/api/v3/read/model"
READ_MODEL_ASSOCIATION_PATH = "/api/v3/read/model/association"
READ_MODEL_ATTRIBUTES_PATH = "/api/v3/read/model/attributes"
READ_MODEL_GROUP_PATH = "/api/v3/read/model/group"
READ_INSTANCE_ASSOCIATION_PATH = "/api/v3/read/instanceassociation"

_DEFAULT_TIMEOUT_SECONDS = 5.0


class CoreServiceLookupGateway:
    """Blocking client; httpx.Client is safe to share across request threads."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout_seconds,
            headers=headers or {},
        )

    def close(self) -> None:
        self._client.close()

    def _read(self, path: str, cond: Condition) -> List[Dict[str, Any]]:
        try:
            resp = self._client.post(path, json={"condition": dict(cond)})
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            log.warning("core service read failed path=%s err=%s", path, e)
            raise GatewayError(f"core service read {path} failed: {e}") from e
        except ValueError as e:
            raise GatewayError(f"core service read {path} returned invalid json") from e

        if not isinstance(payload, dict) or not payload.get("result", False):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise GatewayError(f"core service read {path} failed: {message or 'unknown error'}")

        data = payload.get("data") or {}
        info = data.get("info") if isinstance(data, dict) else None
        if info is None:
            return []
        if not isinstance(info, list):
            raise GatewayError(f"core service read {path} returned malformed data")
        return info

    def _records(self, record_cls, path: str, cond: Condition) -> list:
        rows = self._read(path, cond)
        try:
            return [record_from_dict(record_cls, row) for row in rows]
        except (TypeError, ValueError) as e:
            raise GatewayError(f"core service read {path} returned malformed record: {e}") from e

    def find_schemas(self, cond: Condition) -> List[Schema]:
        return self._records(Schema, READ_MODEL_PATH, cond)

    def find_association_defs(self, cond: Condition) -> List[AssociationDef]:
        return self._records(AssociationDef, READ_MODEL_ASSOCIATION_PATH, cond)

    def find_attributes(self, cond: Condition) -> List[Attribute]:
        return self._records(Attribute, READ_MODEL_ATTRIBUTES_PATH, cond)

    def find_attribute_groups(self, cond: Condition) -> List[AttributeGroup]:
        return self._records(AttributeGroup, READ_MODEL_GROUP_PATH, cond)

    def find_instance_association(self, cond: Condition) -> Optional[InstanceAssociation]:
        found = self._records(InstanceAssociation, READ_INSTANCE_ASSOCIATION_PATH, cond)
        return found[0] if found else None
