from __future__ import annotations


class ResolveError(Exception):
    """Base for every failure that aborts a resolution (deny-leaning)."""

    kind = "resolve"


class ParameterError(ResolveError):
    """Malformed path segment or missing/malformed body field."""

    kind = "parameter"


class ModelLookupError(ResolveError):
    """Gateway failure, or a required anchor record was not found."""

    kind = "lookup"


class ScopeError(ResolveError):
    """A business scope is required for this operation but was not supplied."""

    kind = "scope"
