"""
POLICIES - The interaction access-control and messaging policy engine

- visibility: audience classes per viewer and the per-item check
- permissions: the Permission Gate (one rule per action)
- quota: monthly investor-message ledger with atomic reservation
- reveal: one-way investor reveal facts
- conversation_lifecycle: REQUEST / ACTIVE / BLOCKED transition table
"""

from zfounders.domain.policies.decision import Decision, DenialKind
from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.policies.visibility import (
    check_video_visibility,
    filter_visible,
    resolve_visibility_classes,
)
from zfounders.domain.policies.permissions import Actions, PermissionGate
from zfounders.domain.policies.quota import QuotaCheck, QuotaLedger
from zfounders.domain.policies.reveal import RevealLedger, reveals_on_comment
from zfounders.domain.policies.conversation_lifecycle import (
    ConversationEvent,
    Transition,
    apply_event,
    initial_state,
)

__all__ = [
    "Decision",
    "DenialKind",
    "PolicySettings",
    "check_video_visibility",
    "filter_visible",
    "resolve_visibility_classes",
    "Actions",
    "PermissionGate",
    "QuotaCheck",
    "QuotaLedger",
    "RevealLedger",
    "reveals_on_comment",
    "ConversationEvent",
    "Transition",
    "apply_event",
    "initial_state",
]
