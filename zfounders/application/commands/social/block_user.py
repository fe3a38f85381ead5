"""
Block / Unblock commands.

A block in either direction vetoes messaging, removes follow edges both
ways and parks the pair's conversation in BLOCKED. Unblocking restores the
conversation's previous state once no block remains in either direction.
"""

import logging
from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.domain.entities.social import Block
from zfounders.domain.exceptions import DomainValidationError, EntityNotFoundError
from zfounders.domain.policies.conversation_lifecycle import ConversationEvent, apply_event
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import ConversationStatus
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_conversation_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockUserCommand(Command[bool]):
    blocker_id: UserId
    blocked_id: UserId


@dataclass(frozen=True)
class UnblockUserCommand(Command[bool]):
    blocker_id: UserId
    blocked_id: UserId


class BlockUserHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: BlockUserCommand) -> bool:
        if command.blocker_id == command.blocked_id:
            raise DomainValidationError("You cannot block yourself")

        async with self.uow as uow:
            now = self.engine.clock.now()
            actor = await load_actor(uow, command.blocker_id)
            target = await uow.users.get_by_id(command.blocked_id)
            if target is None:
                raise EntityNotFoundError("User not found")

            created = await uow.social.add_block(Block(actor.id, target.id, now))
            removed = await uow.social.remove_follows_between(actor.id, target.id)

            conversation = await uow.conversations.get_between(actor.id, target.id)
            if conversation is not None:
                transition = apply_event(conversation, ConversationEvent.BLOCK)
                await uow.conversations.save(conversation)
                if transition.changed:

                    async def record() -> None:
                        increment_conversation_transition(
                            transition.previous.value, ConversationStatus.BLOCKED.value
                        )

                    uow.on_commit(record)

            logger.info(
                "[Social] %s blocked %s (new=%s, follows removed=%s)",
                actor.id,
                target.id,
                created,
                removed,
            )
            return True


class UnblockUserHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: UnblockUserCommand) -> bool:
        async with self.uow as uow:
            actor = await load_actor(uow, command.blocker_id)
            removed = await uow.social.remove_block(actor.id, command.blocked_id)
            if not removed:
                return False

            if not await uow.social.is_blocked_either(actor.id, command.blocked_id):
                conversation = await uow.conversations.get_between(
                    actor.id, command.blocked_id
                )
                if (
                    conversation is not None
                    and conversation.status == ConversationStatus.BLOCKED
                ):
                    transition = apply_event(conversation, ConversationEvent.UNBLOCK)
                    await uow.conversations.save(conversation)

                    async def record() -> None:
                        increment_conversation_transition(
                            transition.previous.value, conversation.status.value
                        )

                    uow.on_commit(record)
            return True
