"""
API Routers - FastAPI endpoint definitions.
"""

from zfounders.presentation.api.conversations import router as conversations_router
from zfounders.presentation.api.interests import router as interests_router
from zfounders.presentation.api.messages import router as messages_router
from zfounders.presentation.api.metrics import router as metrics_router
from zfounders.presentation.api.moderation import router as moderation_router
from zfounders.presentation.api.notifications import router as notifications_router
from zfounders.presentation.api.realtime import router as realtime_router
from zfounders.presentation.api.users import router as users_router
from zfounders.presentation.api.videos import feed_router, router as videos_router

__all__ = [
    "conversations_router",
    "interests_router",
    "messages_router",
    "metrics_router",
    "moderation_router",
    "notifications_router",
    "realtime_router",
    "users_router",
    "feed_router",
    "videos_router",
]
