"""
MessageLimit Repository Port - Atomic reserve-or-reject on a period counter.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from zfounders.domain.entities.message_limit import MessageLimit
from zfounders.domain.value_objects.user_id import UserId


class MessageLimitRepository(ABC):
    @abstractmethod
    async def get(self, user_id: UserId, period: str) -> Optional[MessageLimit]: ...

    @abstractmethod
    async def try_reserve(
        self,
        user_id: UserId,
        period: str,
        cap: int,
        now: datetime,
        next_reset: datetime,
    ) -> tuple[bool, MessageLimit]:
        """Roll the counter over if it is missing or expired, then increment
        it only while ``count < cap``. One atomic step; the returned limit
        reflects the stored state afterwards."""
        ...
