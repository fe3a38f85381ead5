"""
ENTITIES - Domain objects with identity

Entities are mutable dataclasses compared by identity. They hold no
framework imports; policy decisions live in ``zfounders.domain.policies``.
"""

from zfounders.domain.entities.user import (
    AccountTypeChange,
    InvestorProfile,
    InvestorVerification,
    Subscription,
    User,
)
from zfounders.domain.entities.video import Comment, Video, VideoView
from zfounders.domain.entities.conversation import Conversation, pair_key
from zfounders.domain.entities.message import Message
from zfounders.domain.entities.message_limit import MONTHLY_PERIOD, MessageLimit
from zfounders.domain.entities.interest import ExpressInterest, ProfileReveal
from zfounders.domain.entities.social import Block, Follow, Like
from zfounders.domain.entities.notification import Notification

__all__ = [
    "AccountTypeChange",
    "InvestorProfile",
    "InvestorVerification",
    "Subscription",
    "User",
    "Comment",
    "Video",
    "VideoView",
    "Conversation",
    "pair_key",
    "Message",
    "MONTHLY_PERIOD",
    "MessageLimit",
    "ExpressInterest",
    "ProfileReveal",
    "Block",
    "Follow",
    "Like",
    "Notification",
]
