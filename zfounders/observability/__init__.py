"""Observability package for the zfounders backend."""

from zfounders.observability.metrics import (
    realtime_connected,
    realtime_disconnected,
    observe_request_latency,
    increment_policy_denial,
    increment_quota_outcome,
    increment_conversation_transition,
    increment_notification,
    get_metrics_content,
    QuotaOutcome,
)

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
