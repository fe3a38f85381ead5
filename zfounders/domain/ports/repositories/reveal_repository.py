"""
Reveal Repository Port - Append-only (investor, founder) reveal facts.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from zfounders.domain.value_objects.user_id import UserId


class RevealRepository(ABC):
    @abstractmethod
    async def add(self, investor_id: UserId, founder_id: UserId, now: datetime) -> bool:
        """Idempotent upsert. Returns True when the fact is new."""
        ...

    @abstractmethod
    async def exists(self, investor_id: UserId, founder_id: UserId) -> bool: ...

    @abstractmethod
    async def revealed_to(self, founder_id: UserId) -> set[str]:
        """Investor ids revealed to ``founder_id``."""
        ...
