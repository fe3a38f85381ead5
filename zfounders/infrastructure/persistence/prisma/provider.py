"""Dishka provider for the Prisma backend. Imported only when it is selected."""

import logging
from typing import AsyncIterator

from dishka import Provider, Scope, provide
from prisma import Prisma

from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.infrastructure.persistence.prisma.prisma_unit_of_work import PrismaUnitOfWork

logger = logging.getLogger(__name__)


class PrismaPersistenceProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterator[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - connected once at startup, disconnected when the container closes
        """
        prisma = Prisma()
        await prisma.connect()
        logger.info("[Prisma] connected")
        yield prisma
        await prisma.disconnect()
        logger.info("[Prisma] disconnected")

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, prisma: Prisma) -> UnitOfWork:
        return PrismaUnitOfWork(prisma)
