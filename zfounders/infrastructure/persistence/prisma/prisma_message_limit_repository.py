"""
Prisma MessageLimit Repository Implementation.

try_reserve is a sequence of conditional writes inside the caller's
transaction: ensure the row, roll it over if expired, then increment only
where ``count < cap``. The row lock taken by the first update serialises
concurrent senders, so the counter never passes the cap.
"""

from datetime import datetime
from typing import Optional

from prisma import Prisma

from zfounders.domain.entities.message_limit import MessageLimit
from zfounders.domain.ports.repositories import MessageLimitRepository
from zfounders.domain.value_objects import UserId


class PrismaMessageLimitRepository(MessageLimitRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    @staticmethod
    def _where(user_id: UserId, period: str) -> dict:
        return {"user_id_period": {"user_id": user_id.value, "period": period}}

    async def get(self, user_id: UserId, period: str) -> Optional[MessageLimit]:
        record = await self._prisma.messagelimit.find_unique(
            where=self._where(user_id, period)
        )
        if record is None:
            return None
        return MessageLimit(
            user_id=UserId(record.user_id),
            period=record.period,
            count=record.count,
            resets_at=record.resets_at,
        )

    async def try_reserve(
        self,
        user_id: UserId,
        period: str,
        cap: int,
        now: datetime,
        next_reset: datetime,
    ) -> tuple[bool, MessageLimit]:
        await self._prisma.messagelimit.upsert(
            where=self._where(user_id, period),
            data={
                "create": {
                    "user_id": user_id.value,
                    "period": period,
                    "count": 0,
                    "resets_at": next_reset,
                },
                "update": {},
            },
        )
        await self._prisma.messagelimit.update_many(
            where={
                "user_id": user_id.value,
                "period": period,
                "resets_at": {"lte": now},
            },
            data={"count": 0, "resets_at": next_reset},
        )
        reserved = await self._prisma.messagelimit.update_many(
            where={"user_id": user_id.value, "period": period, "count": {"lt": cap}},
            data={"count": {"increment": 1}},
        )
        limit = await self.get(user_id, period)
        return reserved == 1, limit
