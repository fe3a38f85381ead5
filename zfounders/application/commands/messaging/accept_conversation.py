"""
Accept Conversation Command.

Only the recipient of a REQUEST can accept it. Accepting activates the
conversation, marks it revealed and, when the initiator is an investor,
records the investor as revealed to the accepting founder.
"""

import logging
from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.conversation import ConversationDTO, to_conversation_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.conversation_lifecycle import ConversationEvent, apply_event
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.policies.reveal import RevealLedger
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.enums import ConversationStatus, NotificationType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_conversation_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AcceptConversationCommand(Command[ConversationDTO]):
    actor_id: UserId
    conversation_id: ConversationId


class AcceptConversationHandler(CommandHandler[ConversationDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: AcceptConversationCommand) -> ConversationDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            actor = await load_actor(uow, command.actor_id)
            conversation = await uow.conversations.get_by_id(command.conversation_id)
            if conversation is None:
                raise EntityNotFoundError("Conversation not found")
            enforce(
                self.engine.gate.can_act(actor, Actions.RESPOND_TO_REQUEST, conversation),
                Actions.RESPOND_TO_REQUEST,
                self.engine.settings,
            )

            transition = apply_event(conversation, ConversationEvent.ACCEPT)
            await uow.conversations.save(conversation)

            if transition.previous == ConversationStatus.REQUEST:
                initiator = await uow.users.get_by_id(conversation.participant1_id)
                if initiator is not None and initiator.is_investor:
                    await RevealLedger(uow.reveals).reveal(initiator.id, actor.id, now)
                await self.notifier.notify(
                    uow,
                    conversation.participant1_id,
                    NotificationType.MESSAGE_REQUEST_ACCEPTED,
                    "Message Request Accepted",
                    "Your message request was accepted. You can now chat.",
                    now,
                    data={"conversationId": conversation.id.value},
                )

                async def record() -> None:
                    increment_conversation_transition(
                        transition.previous.value, conversation.status.value
                    )

                uow.on_commit(record)
                logger.info("[Conversation] %s accepted by %s", conversation.id, actor.id)

            return to_conversation_dto(conversation)
