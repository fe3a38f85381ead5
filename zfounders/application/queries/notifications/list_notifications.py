"""List Notifications Query - the caller's inbox, newest first."""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import load_actor
from zfounders.application.dto.notification import NotificationListDTO, to_notification_dto
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListNotificationsQuery(Query[NotificationListDTO]):
    user_id: UserId
    unread_only: bool = False
    limit: int = 50


class ListNotificationsHandler(QueryHandler[NotificationListDTO]):
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, query: ListNotificationsQuery) -> NotificationListDTO:
        async with self.uow as uow:
            user = await load_actor(uow, query.user_id)
            notifications = await uow.notifications.list_for_user(
                user.id, limit=query.limit, unread_only=query.unread_only
            )
            return NotificationListDTO(
                notifications=[to_notification_dto(n) for n in notifications],
                unread_count=await uow.notifications.count_unread(user.id),
            )
