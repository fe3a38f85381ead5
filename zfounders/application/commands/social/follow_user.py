"""Follow / Unfollow commands."""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.user import public_label
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.social import Follow
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationType
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class FollowUserCommand(Command[bool]):
    follower_id: UserId
    following_id: UserId


@dataclass(frozen=True)
class UnfollowUserCommand(Command[bool]):
    follower_id: UserId
    following_id: UserId


class FollowUserHandler(CommandHandler[bool]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: FollowUserCommand) -> bool:
        """Returns True when a new edge was created; following twice is a no-op."""
        async with self.uow as uow:
            now = self.engine.clock.now()
            actor = await load_actor(uow, command.follower_id)
            target = await uow.users.get_by_id(command.following_id)
            if target is None or not target.is_active:
                raise EntityNotFoundError("User not found")

            blocked = await uow.social.is_blocked_either(actor.id, target.id)
            enforce(
                self.engine.gate.can_act(actor, Actions.FOLLOW, target, blocked=blocked),
                Actions.FOLLOW,
                self.engine.settings,
            )

            created = await uow.social.add_follow(Follow(actor.id, target.id, now))
            if created:
                await self.notifier.notify(
                    uow,
                    target.id,
                    NotificationType.NEW_FOLLOWER,
                    "New Follower",
                    f"{public_label(actor)} started following you",
                    now,
                    data={"followerId": actor.id.value},
                )
            return created


class UnfollowUserHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: UnfollowUserCommand) -> bool:
        async with self.uow as uow:
            await load_actor(uow, command.follower_id)
            return await uow.social.remove_follow(command.follower_id, command.following_id)
