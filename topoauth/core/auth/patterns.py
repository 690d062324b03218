from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from topoauth.core.gateway import ModelLookupGateway

from .context import RequestContext
from .meta import ResourceAttribute

API_PREFIX = "/api/v3"

Handler = Callable[[RequestContext, ModelLookupGateway], List[ResourceAttribute]]


@dataclass(frozen=True)
class RouteRule:
    method: str  # "GET", "POST", "PUT", "DELETE"
    pattern: Union[str, re.Pattern]
    handler: Handler

    @property
    def kind(self) -> str:
        return "exact" if isinstance(self.pattern, str) else "regex"

    @property
    def expression(self) -> str:
        return self.pattern if isinstance(self.pattern, str) else self.pattern.pattern

    def hit(self, ctx: RequestContext) -> bool:
        if self.method != ctx.method:
            return False
        if isinstance(self.pattern, str):
            return ctx.uri == self.pattern
        return self.pattern.match(ctx.uri) is not None


def exact(method: str, path: str, handler: Handler) -> RouteRule:
    return RouteRule(method=method, pattern=API_PREFIX + path, handler=handler)


def regex(method: str, expr: str, handler: Handler) -> RouteRule:
    """expr is anchored and may end with an optional slash."""
    return RouteRule(method=method, pattern=re.compile("^" + API_PREFIX + expr + "/?$"), handler=handler)


# path segment shapes
NAME = r"[^\s/]+"
NUM = r"[0-9]+"


@dataclass(frozen=True)
class ResolverFamily:
    """
    One domain area of the route surface.

    Ordered: first matching rule wins, so more specific shapes go first.
    """

    name: str
    rules: Tuple[RouteRule, ...]

    def match(self, ctx: RequestContext) -> Optional[RouteRule]:
        for rule in self.rules:
            if rule.hit(ctx):
                return rule
        return None
