"""
Dishka DI Container Setup.

- AppProvider: settings, clock, policy engine, realtime, notification emitter
  (Scope.APP) and every command/query handler (Scope.REQUEST)
- MemoryPersistenceProvider / PrismaPersistenceProvider: the UnitOfWork
  implementation, chosen by Config.PERSISTENCE_BACKEND

Flow:
  Container → provides → MemoryUnitOfWork / PrismaUnitOfWork → to → handlers
                                    ↓
                            uses UnitOfWork interface
"""

import logging
from typing import AsyncIterator, Optional

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from zfounders.application.commands.accounts import (
    ReviewVerificationHandler,
    SwitchAccountTypeHandler,
    UpdatePrivacySettingsHandler,
)
from zfounders.application.commands.interests import (
    ExpressInterestHandler,
    RespondToInterestHandler,
)
from zfounders.application.commands.messaging import (
    AcceptConversationHandler,
    DeclineConversationHandler,
    SendConversationMessageHandler,
    SendDirectMessageHandler,
)
from zfounders.application.commands.notifications import (
    MarkAllNotificationsReadHandler,
    MarkNotificationReadHandler,
)
from zfounders.application.commands.social import (
    BlockUserHandler,
    FollowUserHandler,
    UnblockUserHandler,
    UnfollowUserHandler,
)
from zfounders.application.commands.videos import (
    CommentOnVideoHandler,
    CreateVideoHandler,
    LikeVideoHandler,
)
from zfounders.application.common import PolicyEngine
from zfounders.application.queries.conversations import (
    GetConversationMessagesHandler,
    ListConversationsHandler,
    ListMessageRequestsHandler,
)
from zfounders.application.queries.interests import (
    ListReceivedInterestsHandler,
    ListSentInterestsHandler,
)
from zfounders.application.queries.notifications import ListNotificationsHandler
from zfounders.application.queries.users import GetProfileHandler, ListBlockedUsersHandler
from zfounders.application.queries.videos import (
    GetVideoHandler,
    ListFeedHandler,
    VideoAnalyticsHandler,
)
from zfounders.application.services import NotificationEmitter
from zfounders.config.settings import Config, policy_settings
from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.ports.clock import Clock
from zfounders.domain.ports.realtime import RealtimePublisher
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.infrastructure.clock import SystemClock
from zfounders.infrastructure.persistence.memory import MemoryStore, MemoryUnitOfWork
from zfounders.infrastructure.realtime import (
    ConnectionRegistry,
    RedisRealtimePublisher,
    create_redis_client,
)

logger = logging.getLogger(__name__)


class AppProvider(Provider):
    """
    Application dependency provider.

    ``clock`` may be injected so tests can pin the time the policy core sees.
    """

    def __init__(self, config=Config, clock: Optional[Clock] = None):
        super().__init__()
        self._config = config
        self._clock = clock

    # ==================== SETTINGS ====================

    @provide(scope=Scope.APP)
    def get_policy_settings(self) -> PolicySettings:
        return policy_settings(self._config)

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        return self._clock or SystemClock()

    @provide(scope=Scope.APP)
    def get_policy_engine(self, settings: PolicySettings, clock: Clock) -> PolicyEngine:
        return PolicyEngine.build(settings, clock)

    # ==================== REALTIME ====================

    @provide(scope=Scope.APP)
    def get_connection_registry(self) -> ConnectionRegistry:
        return ConnectionRegistry()

    @provide(scope=Scope.APP)
    async def get_realtime_publisher(
        self, registry: ConnectionRegistry
    ) -> AsyncIterator[RealtimePublisher]:
        """
        Provide the realtime publisher.

        - "memory": the registry itself (single worker)
        - "redis": pub/sub fan-out; the relay task lives as long as the container
        """
        if self._config.REALTIME_BACKEND != "redis":
            yield registry
            return
        client = await create_redis_client(self._config.REDIS_URL)
        publisher = RedisRealtimePublisher(client, registry)
        await publisher.start()
        yield publisher
        await publisher.close()

    @provide(scope=Scope.APP)
    def get_notification_emitter(self, realtime: RealtimePublisher) -> NotificationEmitter:
        return NotificationEmitter(realtime)

    # ==================== COMMAND HANDLERS ====================

    send_direct_message = provide(SendDirectMessageHandler, scope=Scope.REQUEST)
    send_conversation_message = provide(SendConversationMessageHandler, scope=Scope.REQUEST)
    accept_conversation = provide(AcceptConversationHandler, scope=Scope.REQUEST)
    decline_conversation = provide(DeclineConversationHandler, scope=Scope.REQUEST)
    express_interest = provide(ExpressInterestHandler, scope=Scope.REQUEST)
    respond_to_interest = provide(RespondToInterestHandler, scope=Scope.REQUEST)
    create_video = provide(CreateVideoHandler, scope=Scope.REQUEST)
    like_video = provide(LikeVideoHandler, scope=Scope.REQUEST)
    comment_on_video = provide(CommentOnVideoHandler, scope=Scope.REQUEST)
    follow_user = provide(FollowUserHandler, scope=Scope.REQUEST)
    unfollow_user = provide(UnfollowUserHandler, scope=Scope.REQUEST)
    block_user = provide(BlockUserHandler, scope=Scope.REQUEST)
    unblock_user = provide(UnblockUserHandler, scope=Scope.REQUEST)
    switch_account_type = provide(SwitchAccountTypeHandler, scope=Scope.REQUEST)
    review_verification = provide(ReviewVerificationHandler, scope=Scope.REQUEST)
    update_privacy_settings = provide(UpdatePrivacySettingsHandler, scope=Scope.REQUEST)
    mark_notification_read = provide(MarkNotificationReadHandler, scope=Scope.REQUEST)
    mark_all_notifications_read = provide(
        MarkAllNotificationsReadHandler, scope=Scope.REQUEST
    )

    # ==================== QUERY HANDLERS ====================

    list_conversations = provide(ListConversationsHandler, scope=Scope.REQUEST)
    list_message_requests = provide(ListMessageRequestsHandler, scope=Scope.REQUEST)
    get_conversation_messages = provide(GetConversationMessagesHandler, scope=Scope.REQUEST)
    list_received_interests = provide(ListReceivedInterestsHandler, scope=Scope.REQUEST)
    list_sent_interests = provide(ListSentInterestsHandler, scope=Scope.REQUEST)
    get_video = provide(GetVideoHandler, scope=Scope.REQUEST)
    list_feed = provide(ListFeedHandler, scope=Scope.REQUEST)
    video_analytics = provide(VideoAnalyticsHandler, scope=Scope.REQUEST)
    get_profile = provide(GetProfileHandler, scope=Scope.REQUEST)
    list_blocked = provide(ListBlockedUsersHandler, scope=Scope.REQUEST)
    list_notifications = provide(ListNotificationsHandler, scope=Scope.REQUEST)


class MemoryPersistenceProvider(Provider):
    """In-process store shared by every request of this container."""

    def __init__(self, store: Optional[MemoryStore] = None):
        super().__init__()
        self._store = store

    @provide(scope=Scope.APP)
    def get_store(self) -> MemoryStore:
        return self._store if self._store is not None else MemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, store: MemoryStore) -> UnitOfWork:
        return MemoryUnitOfWork(store)


def create_container(
    config=Config,
    store: Optional[MemoryStore] = None,
    clock: Optional[Clock] = None,
) -> AsyncContainer:
    """
    Create and configure the DI container.

    Call this ONCE per process (or per test).
    """
    if config.PERSISTENCE_BACKEND == "prisma":
        from zfounders.infrastructure.persistence.prisma.provider import (
            PrismaPersistenceProvider,
        )

        persistence = PrismaPersistenceProvider()
    else:
        persistence = MemoryPersistenceProvider(store)
    logger.info(
        "[IoC] persistence=%s realtime=%s",
        config.PERSISTENCE_BACKEND,
        config.REALTIME_BACKEND,
    )
    return make_async_container(AppProvider(config, clock), persistence)
