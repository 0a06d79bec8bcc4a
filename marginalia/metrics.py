"""
Name: Prometheus Metrics

Responsibilities:
  - Define and expose Prometheus metrics
  - Provide /metrics endpoint handler
  - Record request latency/count and anchor relocation outcomes

Collaborators:
  - middleware.py: Records request metrics
  - application/use_cases/relocate_comments.py: Records relocation metrics

Constraints:
  - Low cardinality labels only (endpoint, method, status, outcome)
  - Never label with comment/text/user IDs

Notes:
  - Metrics live in a private registry (no default process collectors)
  - Histogram buckets chosen for scan latencies of long documents
"""

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# R: Request counter with endpoint and status labels
_requests_total = Counter(
    "marginalia_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

# R: Request latency histogram (seconds)
_request_latency = Histogram(
    "marginalia_request_latency_seconds",
    "HTTP request latency in seconds",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# R: Relocation outcomes (exact, fuzzy, approximate, not_found, aborted)
_relocations_total = Counter(
    "marginalia_anchor_relocations_total",
    "Anchor relocation attempts by outcome",
    ["outcome"],
    registry=_registry,
)

_relocation_latency = Histogram(
    "marginalia_window_scan_seconds",
    "Time spent re-locating a single anchor",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """
    R: Record HTTP request metrics.

    Args:
        endpoint: Request path (e.g., "/v1/comments")
        method: HTTP method (e.g., "POST")
        status_code: Response status code
        latency_seconds: Request duration in seconds
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_relocation_metrics(outcome: str, latency_seconds: float) -> None:
    """
    R: Record one anchor relocation.

    Args:
        outcome: MatchType value, "not_found" or "aborted"
        latency_seconds: Time spent on this anchor
    """
    _relocations_total.labels(outcome=outcome).inc()
    _relocation_latency.observe(latency_seconds)


def _normalize_endpoint(path: str) -> str:
    """
    R: Normalize endpoint path to prevent high cardinality.

    Replaces UUIDs and numeric IDs with placeholders.
    """
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """R: Bucket status code (2xx, 4xx, 5xx)."""
    if 200 <= code < 300:
        return "2xx"
    elif 400 <= code < 500:
        return "4xx"
    elif 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """
    R: Generate Prometheus metrics response.

    Returns:
        Tuple of (body bytes, content type)
    """
    return generate_latest(_registry), CONTENT_TYPE_LATEST
