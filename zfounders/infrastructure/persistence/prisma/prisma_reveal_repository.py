"""Prisma ProfileReveal Repository Implementation. Reveals are insert-only."""

from datetime import datetime

from prisma import Prisma

from zfounders.domain.ports.repositories import RevealRepository
from zfounders.domain.value_objects import UserId


class PrismaRevealRepository(RevealRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def add(self, investor_id: UserId, founder_id: UserId, now: datetime) -> bool:
        created = await self._prisma.profilereveal.create_many(
            data=[{
                "investor_id": investor_id.value,
                "founder_id": founder_id.value,
                "revealed_at": now,
            }],
            skip_duplicates=True,
        )
        return created > 0

    async def exists(self, investor_id: UserId, founder_id: UserId) -> bool:
        record = await self._prisma.profilereveal.find_unique(
            where={"investor_id_founder_id": {
                "investor_id": investor_id.value,
                "founder_id": founder_id.value,
            }}
        )
        return record is not None

    async def revealed_to(self, founder_id: UserId) -> set[str]:
        records = await self._prisma.profilereveal.find_many(
            where={"founder_id": founder_id.value}
        )
        return {r.investor_id for r in records}
