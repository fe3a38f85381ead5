"""
Reveal Ledger - one-way "this investor is visible to this founder" facts.

Facts are append-only: ``reveal`` upserts, nothing deletes. Whether a
viewer may see an investor's full profile is
``public mode OR revealed OR contextual exception``.
"""

import logging
from datetime import datetime
from typing import Optional

from zfounders.domain.entities.user import User
from zfounders.domain.ports.repositories import RevealRepository
from zfounders.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class RevealLedger:
    def __init__(self, reveals: RevealRepository):
        self.reveals = reveals

    async def reveal(self, investor_id: UserId, founder_id: UserId, now: datetime) -> bool:
        if investor_id == founder_id:
            return False
        created = await self.reveals.add(investor_id, founder_id, now)
        if created:
            logger.info("[Reveal] investor %s revealed to %s", investor_id, founder_id)
        return created

    async def is_revealed_to(self, investor_id: UserId, founder_id: UserId) -> bool:
        return await self.reveals.exists(investor_id, founder_id)

    async def can_see_investor(
        self,
        investor: User,
        viewer_id: Optional[UserId],
        contextual: bool = False,
    ) -> bool:
        if not investor.is_private_investor:
            return True
        if viewer_id is None:
            return False
        if viewer_id == investor.id or contextual:
            return True
        return await self.is_revealed_to(investor.id, viewer_id)


def reveals_on_comment(commenter: User, video_owner_id: UserId) -> bool:
    """A private investor commenting on someone else's video reveals itself to the owner."""
    return commenter.is_private_investor and commenter.id != video_owner_id
