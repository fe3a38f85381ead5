"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.video_id import VideoId
from zfounders.domain.value_objects.message_id import MessageId
from zfounders.domain.value_objects.interest_id import InterestId
from zfounders.domain.value_objects.enums import (
    AccountType,
    ConversationStatus,
    InterestStatus,
    NotificationPriority,
    NotificationType,
    SubscriptionTier,
    VerificationStatus,
    VideoType,
    VisibilityClass,
)

__all__ = [
    "UserId",
    "ConversationId",
    "VideoId",
    "MessageId",
    "InterestId",
    "AccountType",
    "ConversationStatus",
    "InterestStatus",
    "NotificationPriority",
    "NotificationType",
    "SubscriptionTier",
    "VerificationStatus",
    "VideoType",
    "VisibilityClass",
]
