"""Prisma Notification Repository Implementation."""

from datetime import datetime

from prisma import Json, Prisma

from zfounders.domain.entities.notification import Notification
from zfounders.domain.ports.repositories import NotificationRepository
from zfounders.domain.value_objects import NotificationPriority, NotificationType, UserId


class PrismaNotificationRepository(NotificationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def add(self, notification: Notification) -> None:
        await self._prisma.notification.create(
            data={
                "id": notification.id,
                "user_id": notification.user_id.value,
                "type": notification.type.value,
                "priority": notification.priority.value,
                "title": notification.title,
                "body": notification.body,
                "data": Json(notification.data),
                "created_at": notification.created_at,
            }
        )

    async def list_for_user(
        self, user_id: UserId, limit: int = 50, unread_only: bool = False
    ) -> list[Notification]:
        where = {"user_id": user_id.value}
        if unread_only:
            where["read_at"] = None
        records = await self._prisma.notification.find_many(
            where=where,
            order={"created_at": "desc"},
            take=limit,
        )
        return [self._to_entity(r) for r in records]

    async def count_unread(self, user_id: UserId) -> int:
        return await self._prisma.notification.count(
            where={"user_id": user_id.value, "read_at": None}
        )

    async def mark_read(self, user_id: UserId, notification_id: str, now: datetime) -> bool:
        record = await self._prisma.notification.find_first(
            where={"id": notification_id, "user_id": user_id.value}
        )
        if record is None:
            return False
        if record.read_at is None:
            await self._prisma.notification.update(
                where={"id": notification_id}, data={"read_at": now}
            )
        return True

    async def mark_all_read(self, user_id: UserId, now: datetime) -> int:
        return await self._prisma.notification.update_many(
            where={"user_id": user_id.value, "read_at": None},
            data={"read_at": now},
        )

    def _to_entity(self, record) -> Notification:
        return Notification(
            id=record.id,
            user_id=UserId(record.user_id),
            type=NotificationType(record.type),
            priority=NotificationPriority(record.priority),
            title=record.title,
            body=record.body,
            created_at=record.created_at,
            data=record.data or {},
            read_at=record.read_at,
        )
