"""Notification inbox DTOs."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from zfounders.domain.entities.notification import Notification


class NotificationDTO(BaseModel):
    id: str
    type: str
    priority: str
    title: str
    body: str
    data: dict[str, Any]
    created_at: datetime
    read_at: Optional[datetime] = None


class NotificationListDTO(BaseModel):
    notifications: list[NotificationDTO]
    unread_count: int


def to_notification_dto(notification: Notification) -> NotificationDTO:
    return NotificationDTO(
        id=notification.id,
        type=notification.type.value,
        priority=notification.priority.value,
        title=notification.title,
        body=notification.body,
        data=dict(notification.data),
        created_at=notification.created_at,
        read_at=notification.read_at,
    )
