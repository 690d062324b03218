from .chain import LATEST_VERSION, ResolverRegistry, default_registry, resolve
from .context import RequestContext, ResolveResult
from .errors import ModelLookupError, ParameterError, ResolveError, ScopeError
from .meta import Action, Item, ResourceAttribute, ResourceType

__all__ = [
    "Action",
    "Item",
    "LATEST_VERSION",
    "ModelLookupError",
    "ParameterError",
    "RequestContext",
    "ResolveError",
    "ResolveResult",
    "ResolverRegistry",
    "ResourceAttribute",
    "ResourceType",
    "ScopeError",
    "default_registry",
    "resolve",
]
