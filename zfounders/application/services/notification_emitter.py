"""
Notification Emitter - durable record plus realtime push.

The record is written through the caller's unit of work, so it commits or
rolls back together with the state change that caused it. The push is
queued with ``on_commit`` and only leaves the process once that commit has
succeeded.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from zfounders.domain.entities.notification import Notification
from zfounders.domain.ports.realtime import RealtimePublisher
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationPriority, NotificationType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_notification

logger = logging.getLogger(__name__)

PRIORITIES = {
    NotificationType.NEW_MESSAGE: NotificationPriority.HIGH,
    NotificationType.MESSAGE_REQUEST: NotificationPriority.HIGH,
    NotificationType.MESSAGE_REQUEST_ACCEPTED: NotificationPriority.HIGH,
    NotificationType.EXPRESS_INTEREST: NotificationPriority.HIGH,
    NotificationType.INTEREST_ACCEPTED: NotificationPriority.HIGH,
    NotificationType.VERIFICATION_RESULT: NotificationPriority.HIGH,
    NotificationType.NEW_COMMENT: NotificationPriority.MEDIUM,
    NotificationType.NEW_FOLLOWER: NotificationPriority.MEDIUM,
    NotificationType.NEW_LIKE: NotificationPriority.LOW,
}


def preview(text: Optional[str], length: int = 50) -> str:
    if not text:
        return ""
    return text[:length] + ("..." if len(text) > length else "")


class NotificationEmitter:
    def __init__(self, realtime: RealtimePublisher):
        self.realtime = realtime

    async def notify(
        self,
        uow: UnitOfWork,
        user_id: UserId,
        type: NotificationType,
        title: str,
        body: str,
        now: datetime,
        data: Optional[dict[str, Any]] = None,
    ) -> Notification:
        notification = Notification.create(
            user_id=user_id,
            type=type,
            priority=PRIORITIES.get(type, NotificationPriority.MEDIUM),
            title=title,
            body=body,
            now=now,
            data=data,
        )
        await uow.notifications.add(notification)

        async def deliver() -> None:
            increment_notification(type.value)
            logger.debug("[Notify] %s -> %s", type.value, user_id)
            await self.realtime.publish(user_id.value, notification.to_event())

        uow.on_commit(deliver)
        return notification

    def push(self, uow: UnitOfWork, user_id: UserId, event: dict[str, Any]) -> None:
        """Realtime-only event with no durable record."""

        async def deliver() -> None:
            await self.realtime.publish(user_id.value, event)

        uow.on_commit(deliver)
