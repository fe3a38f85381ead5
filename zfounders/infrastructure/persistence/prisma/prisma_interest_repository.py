"""Prisma ExpressInterest Repository Implementation."""

from typing import Optional

from prisma import Prisma
from prisma.models import ExpressInterest as PrismaInterest

from zfounders.domain.entities.interest import ExpressInterest
from zfounders.domain.ports.repositories import InterestRepository
from zfounders.domain.value_objects import InterestId, InterestStatus, UserId, VideoId


class PrismaInterestRepository(InterestRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaInterest) -> ExpressInterest:
        return ExpressInterest(
            id=InterestId(record.id),
            investor_id=UserId(record.investor_id),
            founder_id=UserId(record.founder_id),
            video_id=VideoId(record.video_id),
            status=InterestStatus(record.status),
            created_at=record.created_at,
            message=record.message,
            updated_at=record.updated_at,
        )

    async def get_by_id(self, interest_id: InterestId) -> Optional[ExpressInterest]:
        record = await self._prisma.expressinterest.find_unique(
            where={"id": interest_id.value}
        )
        return self._to_entity(record) if record else None

    async def upsert(self, interest: ExpressInterest) -> ExpressInterest:
        record = await self._prisma.expressinterest.upsert(
            where={"investor_id_founder_id_video_id": {
                "investor_id": interest.investor_id.value,
                "founder_id": interest.founder_id.value,
                "video_id": interest.video_id.value,
            }},
            data={
                "create": {
                    "id": interest.id.value,
                    "investor_id": interest.investor_id.value,
                    "founder_id": interest.founder_id.value,
                    "video_id": interest.video_id.value,
                    "status": InterestStatus.PENDING.value,
                    "message": interest.message,
                    "created_at": interest.created_at,
                },
                "update": {
                    "status": InterestStatus.PENDING.value,
                    "message": interest.message,
                },
            },
        )
        return self._to_entity(record)

    async def save(self, interest: ExpressInterest) -> None:
        await self._prisma.expressinterest.update(
            where={"id": interest.id.value},
            data={"status": interest.status.value, "message": interest.message},
        )

    async def has_accepted(self, investor_id: UserId, founder_id: UserId) -> bool:
        count = await self._prisma.expressinterest.count(
            where={
                "investor_id": investor_id.value,
                "founder_id": founder_id.value,
                "status": InterestStatus.ACCEPTED.value,
            }
        )
        return count > 0

    async def list_received(
        self, founder_id: UserId, status: Optional[InterestStatus] = None
    ) -> list[ExpressInterest]:
        where: dict = {"founder_id": founder_id.value}
        if status is not None:
            where["status"] = status.value
        records = await self._prisma.expressinterest.find_many(
            where=where, order={"created_at": "desc"}
        )
        return [self._to_entity(r) for r in records]

    async def list_sent(self, investor_id: UserId) -> list[ExpressInterest]:
        records = await self._prisma.expressinterest.find_many(
            where={"investor_id": investor_id.value}, order={"created_at": "desc"}
        )
        return [self._to_entity(r) for r in records]
