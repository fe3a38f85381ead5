"""
Prometheus Metrics for the zfounders policy engine.

DEPENDENCY:
    pip install prometheus-client

DATA FLOW:
    This file                  presentation/api/metrics.py
    ─────────                  ────────────────────────────
    Define metrics ──────────► /metrics endpoint ──────────► Prometheus scrape

METRIC TYPES:
    - Gauge: Value goes up/down (live websocket connections)
    - Counter: Value only goes up (denials, reservations, transitions)
    - Histogram: Distribution (request latency)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
REALTIME_CONNECTIONS = Gauge(
    "zf_realtime_connections", "Number of open realtime websocket connections"
)

REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5],
)

POLICY_DENIALS_TOTAL = Counter(
    "zf_policy_denials_total",
    "Total number of actions denied by the permission gate",
    ["action", "reason"],
)

QUOTA_RESERVATIONS_TOTAL = Counter(
    "zf_quota_reservations_total",
    "Outcomes of monthly investor-message quota checks",
    ["outcome"],
)

CONVERSATION_TRANSITIONS_TOTAL = Counter(
    "zf_conversation_transitions_total",
    "Committed conversation state transitions",
    ["from_status", "to_status"],
)

NOTIFICATIONS_TOTAL = Counter(
    "zf_notifications_total",
    "Persistent notifications recorded",
    ["type"],
)


# =============================================================================
# LABEL CONSTANTS
# =============================================================================
class QuotaOutcome:
    """Outcome labels for zf_quota_reservations_total."""

    RESERVED = "reserved"
    REJECTED = "rejected"
    UNMETERED = "unmetered"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def realtime_connected():
    REALTIME_CONNECTIONS.inc()


def realtime_disconnected():
    REALTIME_CONNECTIONS.dec()


def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Integration point: presentation/middleware.py"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def increment_policy_denial(action: str, reason: str):
    """Integration point: application/common/policy.py enforce()"""
    POLICY_DENIALS_TOTAL.labels(action=action, reason=reason).inc()


def increment_quota_outcome(outcome: str):
    QUOTA_RESERVATIONS_TOTAL.labels(outcome=outcome).inc()


def increment_conversation_transition(from_status: str, to_status: str):
    """``to_status`` is ``DELETED`` for a declined request."""
    CONVERSATION_TRANSITIONS_TOTAL.labels(
        from_status=from_status, to_status=to_status
    ).inc()


def increment_notification(type: str):
    NOTIFICATIONS_TOTAL.labels(type=type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "realtime_connected",
    "realtime_disconnected",
    "observe_request_latency",
    "increment_policy_denial",
    "increment_quota_outcome",
    "increment_conversation_transition",
    "increment_notification",
    "get_metrics_content",
    "QuotaOutcome",
]
