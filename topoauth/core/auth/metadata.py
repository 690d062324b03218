"""
Business scope derivation.

Metadata shape (caller scope and schema records alike):
  {"label": {"bk_biz_id": "3"}}

Three ambient modes are used by the resolver families:
  strict   -> malformed value fails, absent means platform-global (0)
  warn     -> malformed value is logged and treated as 0
  required -> value must be present and non-zero
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from topoauth.core.gateway import Schema

from .context import RequestContext
from .errors import ModelLookupError, ParameterError, ScopeError

log = logging.getLogger("topoauth.scope")

LABEL_FIELD = "label"
BUSINESS_ID_FIELD = "bk_biz_id"


def biz_id_from_metadata(metadata: Optional[Mapping[str, Any]]) -> int:
    if metadata is None:
        return 0
    if not isinstance(metadata, Mapping):
        raise ParameterError("invalid metadata, must be an object")
    label = metadata.get(LABEL_FIELD)
    if label is None:
        return 0
    if not isinstance(label, Mapping):
        raise ParameterError("invalid metadata, label must be an object")

    raw = label.get(BUSINESS_ID_FIELD)
    if raw is None or raw == "":
        return 0
    if isinstance(raw, int) and not isinstance(raw, bool):
        biz_id = raw
    elif isinstance(raw, str) and re.fullmatch(r"-?[0-9]+", raw.strip()):
        biz_id = int(raw.strip(), 10)
    else:
        raise ParameterError(f"invalid business id {raw!r} in metadata")
    if biz_id < 0:
        raise ParameterError(f"invalid business id {raw!r} in metadata")
    return biz_id


def schema_biz_id(schema: Schema) -> int:
    """Business scope stored on a model record."""
    try:
        return biz_id_from_metadata(schema.metadata)
    except ParameterError as e:
        raise ModelLookupError(f"model {schema.object_id} has invalid metadata: {e}") from e


def strict_biz_id(ctx: RequestContext) -> int:
    return biz_id_from_metadata(ctx.metadata)


def biz_id_or_warn(ctx: RequestContext, operation: str) -> int:
    try:
        return biz_id_from_metadata(ctx.metadata)
    except ParameterError as e:
        log.warning("%s, but get business id in metadata failed, err: %s", operation, e)
        return 0


def required_biz_id(ctx: RequestContext, operation: str) -> int:
    biz_id = biz_id_from_metadata(ctx.metadata)
    if biz_id == 0:
        raise ScopeError(f"{operation} must have metadata with biz id")
    return biz_id
