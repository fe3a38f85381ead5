"""
Interest Repository Port - ExpressInterest rows keyed by (investor, founder, video).
"""

from abc import ABC, abstractmethod
from typing import Optional

from zfounders.domain.entities.interest import ExpressInterest
from zfounders.domain.value_objects.enums import InterestStatus
from zfounders.domain.value_objects.interest_id import InterestId
from zfounders.domain.value_objects.user_id import UserId


class InterestRepository(ABC):
    @abstractmethod
    async def get_by_id(self, interest_id: InterestId) -> Optional[ExpressInterest]: ...

    @abstractmethod
    async def upsert(self, interest: ExpressInterest) -> ExpressInterest:
        """Insert, or reset the existing row for the same key to pending."""
        ...

    @abstractmethod
    async def save(self, interest: ExpressInterest) -> None: ...

    @abstractmethod
    async def has_accepted(self, investor_id: UserId, founder_id: UserId) -> bool: ...

    @abstractmethod
    async def list_received(
        self, founder_id: UserId, status: Optional[InterestStatus] = None
    ) -> list[ExpressInterest]: ...

    @abstractmethod
    async def list_sent(self, investor_id: UserId) -> list[ExpressInterest]: ...
