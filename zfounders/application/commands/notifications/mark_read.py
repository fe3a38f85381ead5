"""
Mark Notifications Read Commands.

A notification that belongs to someone else is reported as missing, the same
way conversations the caller is not part of are.
"""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class MarkNotificationReadCommand(Command[bool]):
    user_id: UserId
    notification_id: str


@dataclass(frozen=True)
class MarkAllNotificationsReadCommand(Command[int]):
    user_id: UserId


class MarkNotificationReadHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: MarkNotificationReadCommand) -> bool:
        async with self.uow as uow:
            user = await load_actor(uow, command.user_id)
            found = await uow.notifications.mark_read(
                user.id, command.notification_id, self.engine.clock.now()
            )
            if not found:
                raise EntityNotFoundError("Notification not found")
            return True


class MarkAllNotificationsReadHandler(CommandHandler[int]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: MarkAllNotificationsReadCommand) -> int:
        async with self.uow as uow:
            user = await load_actor(uow, command.user_id)
            return await uow.notifications.mark_all_read(user.id, self.engine.clock.now())
