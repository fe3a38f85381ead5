"""
Notification Repository Port - Durable notification records.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from zfounders.domain.entities.notification import Notification
from zfounders.domain.value_objects.user_id import UserId


class NotificationRepository(ABC):
    @abstractmethod
    async def add(self, notification: Notification) -> None: ...

    @abstractmethod
    async def list_for_user(
        self, user_id: UserId, limit: int = 50, unread_only: bool = False
    ) -> list[Notification]: ...

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int: ...

    @abstractmethod
    async def mark_read(self, user_id: UserId, notification_id: str, now: datetime) -> bool:
        """Mark one of the user's notifications read. False if it is not theirs."""

    @abstractmethod
    async def mark_all_read(self, user_id: UserId, now: datetime) -> int: ...
