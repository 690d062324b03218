from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .errors import ParameterError
from .meta import ResourceAttribute


def split_elements(uri: str) -> Tuple[str, ...]:
    """/api/v3/find/object/ -> ("api", "v3", "find", "object")"""
    trimmed = (uri or "").strip("/")
    if not trimmed:
        return ()
    return tuple(trimmed.split("/"))


@dataclass(frozen=True)
class RequestContext:
    """
    Immutable view of one inbound API call.

    body is kept raw and decoded on first access; resolvers that never look
    at the body never fail on a malformed one.
    """

    method: str
    uri: str
    elements: Tuple[str, ...]
    raw_body: bytes = b""
    explicit_metadata: Optional[Mapping[str, Any]] = None

    @classmethod
    def build(
        cls,
        method: str,
        uri: str,
        body: Union[bytes, str, Any] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> "RequestContext":
        if body is None:
            raw = b""
        elif isinstance(body, bytes):
            raw = body
        elif isinstance(body, str):
            raw = body.encode("utf-8")
        else:
            raw = json.dumps(body).encode("utf-8")

        path = (uri or "").split("?", 1)[0]
        return cls(
            method=(method or "GET").upper(),
            uri=path,
            elements=split_elements(path),
            raw_body=raw,
            explicit_metadata=metadata,
        )

    @cached_property
    def body(self) -> Dict[str, Any]:
        if not self.raw_body.strip():
            return {}
        try:
            data = json.loads(self.raw_body)
        except (ValueError, UnicodeDecodeError) as e:
            raise ParameterError(f"request body is not valid json: {e}") from e
        if not isinstance(data, dict):
            raise ParameterError("request body must be a json object")
        return data

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Caller scope: explicit transport metadata, else the body's own metadata field."""
        if self.explicit_metadata is not None:
            return self.explicit_metadata
        try:
            md = self.body.get("metadata")
        except ParameterError:
            return {}
        return md if isinstance(md, Mapping) else {}

    def element(self, index: int) -> str:
        try:
            return self.elements[index]
        except IndexError:
            raise ParameterError(f"path {self.uri} has no segment at position {index}")

    def expect_elements(self, count: int, operation: str) -> None:
        if len(self.elements) != count:
            raise ParameterError(f"{operation}, but got invalid url")

    def int_element(self, index: int, operation: str, what: str) -> int:
        raw = self.element(index)
        try:
            return int(raw, 10)
        except ValueError:
            raise ParameterError(f"{operation}, but got invalid {what} {raw}")

    def body_field(self, name: str, operation: str) -> Any:
        value = self.body.get(name)
        if value is None or value == "":
            raise ParameterError(f"{operation}, but {name} is missing in request body")
        return value

    def body_int(self, name: str, operation: str) -> int:
        return parse_id(self.body_field(name, operation), f"{operation}, but got invalid {name}")


def parse_id(value: Any, message: str) -> int:
    """Accepts ints and ASCII decimal strings; bools, floats and negatives are rejected."""
    if isinstance(value, bool):
        raise ParameterError(f"{message} {value!r}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and re.fullmatch(r"[0-9]+", value.strip()):
        parsed = int(value.strip(), 10)
    else:
        raise ParameterError(f"{message} {value!r}")
    if parsed < 0:
        raise ParameterError(f"{message} {value!r}")
    return parsed


@dataclass(frozen=True)
class ResolveResult:
    """
    Outcome of one pass through a resolver chain.

    failure set => resources are never authoritative and are left empty.
    matched False and no failure => route unmatched, default policy applies.
    """

    resources: Tuple[ResourceAttribute, ...] = ()
    failure: Optional[Exception] = None
    matched: bool = False
    family: Optional[str] = None
    version: str = "latest"

    @property
    def failed(self) -> bool:
        return self.failure is not None
