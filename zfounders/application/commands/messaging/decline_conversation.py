"""
Decline Conversation Command.

Deletes a REQUEST conversation and its messages. The sender is not told:
no notification of any kind is recorded or pushed.
"""

import logging
from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.conversation_lifecycle import ConversationEvent, apply_event
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_conversation_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclineConversationCommand(Command[bool]):
    actor_id: UserId
    conversation_id: ConversationId


class DeclineConversationHandler(CommandHandler[bool]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: DeclineConversationCommand) -> bool:
        async with self.uow as uow:
            actor = await load_actor(uow, command.actor_id)
            conversation = await uow.conversations.get_by_id(command.conversation_id)
            if conversation is None:
                raise EntityNotFoundError("Conversation not found")
            enforce(
                self.engine.gate.can_act(actor, Actions.RESPOND_TO_REQUEST, conversation),
                Actions.RESPOND_TO_REQUEST,
                self.engine.settings,
            )

            transition = apply_event(conversation, ConversationEvent.DECLINE)
            await uow.messages.delete_for_conversation(conversation.id)
            await uow.conversations.delete(conversation.id)

            async def record() -> None:
                increment_conversation_transition(transition.previous.value, "DELETED")

            uow.on_commit(record)
            logger.info("[Conversation] %s declined", conversation.id)
            return True
