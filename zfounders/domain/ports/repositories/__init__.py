"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the policy engine needs
- Does NOT specify implementation (Prisma, in-memory, etc.)

Composite-key upserts are idempotent: a duplicate is "already true",
never an error.
"""

from zfounders.domain.ports.repositories.user_repository import UserRepository
from zfounders.domain.ports.repositories.video_repository import VideoRepository
from zfounders.domain.ports.repositories.conversation_repository import ConversationRepository
from zfounders.domain.ports.repositories.message_repository import MessageRepository
from zfounders.domain.ports.repositories.message_limit_repository import MessageLimitRepository
from zfounders.domain.ports.repositories.interest_repository import InterestRepository
from zfounders.domain.ports.repositories.reveal_repository import RevealRepository
from zfounders.domain.ports.repositories.social_graph_repository import SocialGraphRepository
from zfounders.domain.ports.repositories.notification_repository import NotificationRepository

__all__ = [
    "UserRepository",
    "VideoRepository",
    "ConversationRepository",
    "MessageRepository",
    "MessageLimitRepository",
    "InterestRepository",
    "RevealRepository",
    "SocialGraphRepository",
    "NotificationRepository",
]
