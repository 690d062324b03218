from __future__ import annotations

import re
from prometheus_client import Counter, Histogram


def normalize_path(path: str) -> str:
    """Reduce high-cardinality paths for metrics labels."""
    p = path or "/"

    # long hex
    p = re.sub(r"/[0-9a-fA-F]{16,}", "/:hex", p)
    # ints
    p = re.sub(r"/\d+", "/:id", p)

    return p


HTTP_REQUESTS_TOTAL = Counter(
    "topoauth_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "topoauth_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

RESOLUTIONS_TOTAL = Counter(
    "topoauth_resolutions_total",
    "Resource resolution outcomes",
    ["outcome", "family", "kind"],
)


def record_resolution(outcome: str, family: str | None, kind: str | None) -> None:
    # family/kind are bounded by the registered families and error kinds
    RESOLUTIONS_TOTAL.labels(outcome=outcome, family=family or "none", kind=kind or "none").inc()
