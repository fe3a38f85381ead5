"""Get Profile Query - reveal-aware investor profile fetch."""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.application.dto.user import ProfileDTO, to_profile
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.reveal import RevealLedger
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetProfileQuery(Query[ProfileDTO]):
    user_id: UserId
    viewer_id: Optional[UserId] = None


class GetProfileHandler(QueryHandler[ProfileDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: GetProfileQuery) -> ProfileDTO:
        async with self.uow as uow:
            viewer = None
            if query.viewer_id is not None:
                viewer = await load_actor(uow, query.viewer_id)
            user = await uow.users.get_by_id(query.user_id)
            if user is None or not user.is_active:
                raise EntityNotFoundError("User not found")

            viewer_id = viewer.id if viewer else None
            visible = await RevealLedger(uow.reveals).can_see_investor(user, viewer_id)
            is_following = False
            if viewer_id is not None and viewer_id != user.id:
                is_following = await uow.social.is_following(viewer_id, user.id)
            return to_profile(user, visible, is_following=is_following)
