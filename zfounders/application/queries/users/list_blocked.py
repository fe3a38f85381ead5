"""List Blocked Users Query."""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import load_actor
from zfounders.application.dto.social import BlockDTO, BlockListDTO
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListBlockedUsersQuery(Query[BlockListDTO]):
    user_id: UserId


class ListBlockedUsersHandler(QueryHandler[BlockListDTO]):
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, query: ListBlockedUsersQuery) -> BlockListDTO:
        async with self.uow as uow:
            user = await load_actor(uow, query.user_id)
            blocks = await uow.social.list_blocked(user.id)
            return BlockListDTO(
                blocked=[
                    BlockDTO(blocked_id=b.blocked_id.value, created_at=b.created_at)
                    for b in blocks
                ]
            )
