"""
Prisma UnitOfWork: one interactive transaction per inbound action.

Repositories are rebound to the transaction client on every ``__aenter__``
so all reads and writes of an action share one database transaction.
"""

import logging

from prisma import Prisma

from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.infrastructure.persistence.prisma.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_interest_repository import (
    PrismaInterestRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_message_limit_repository import (
    PrismaMessageLimitRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_message_repository import (
    PrismaMessageRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_notification_repository import (
    PrismaNotificationRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_reveal_repository import (
    PrismaRevealRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_social_graph_repository import (
    PrismaSocialGraphRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_user_repository import (
    PrismaUserRepository,
)
from zfounders.infrastructure.persistence.prisma.prisma_video_repository import (
    PrismaVideoRepository,
)

logger = logging.getLogger(__name__)


class PrismaUnitOfWork(UnitOfWork):
    def __init__(self, prisma: Prisma):
        super().__init__()
        self._prisma = prisma
        self._tx_manager = None

    def _bind(self, client: Prisma) -> None:
        self.users = PrismaUserRepository(client)
        self.videos = PrismaVideoRepository(client)
        self.conversations = PrismaConversationRepository(client)
        self.messages = PrismaMessageRepository(client)
        self.message_limits = PrismaMessageLimitRepository(client)
        self.interests = PrismaInterestRepository(client)
        self.reveals = PrismaRevealRepository(client)
        self.social = PrismaSocialGraphRepository(client)
        self.notifications = PrismaNotificationRepository(client)

    async def _begin(self) -> None:
        self._tx_manager = self._prisma.tx()
        client = await self._tx_manager.start()
        self._bind(client)

    async def _commit(self) -> None:
        manager, self._tx_manager = self._tx_manager, None
        if manager is not None:
            await manager.commit()

    async def _rollback(self) -> None:
        manager, self._tx_manager = self._tx_manager, None
        if manager is not None:
            try:
                await manager.rollback()
            except Exception:
                logger.exception("[UoW] transaction rollback failed")
                raise
