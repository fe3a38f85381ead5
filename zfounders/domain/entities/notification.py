"""
Notification Entity - Durable record of an event addressed to one user.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from zfounders.domain.value_objects.enums import NotificationPriority, NotificationType
from zfounders.domain.value_objects.user_id import UserId


@dataclass
class Notification:
    id: str
    user_id: UserId
    type: NotificationType
    priority: NotificationPriority
    title: str
    body: str
    created_at: datetime
    data: dict[str, Any] = field(default_factory=dict)
    read_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        user_id: UserId,
        type: NotificationType,
        priority: NotificationPriority,
        title: str,
        body: str,
        now: datetime,
        data: Optional[dict[str, Any]] = None,
    ) -> Notification:
        return cls(
            id=str(uuid4()),
            user_id=user_id,
            type=type,
            priority=priority,
            title=title,
            body=body,
            created_at=now,
            data=data or {},
        )

    def to_event(self) -> dict[str, Any]:
        """Realtime payload pushed to the recipient's channel."""
        return {
            "event": "notification",
            "id": self.id,
            "type": self.type.value,
            "priority": self.priority.value,
            "title": self.title,
            "body": self.body,
            "data": self.data,
            "createdAt": self.created_at.isoformat(),
        }
