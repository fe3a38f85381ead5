"""Send Conversation Message Command - reply inside an existing conversation."""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.commands.messaging.delivery import (
    clean_content,
    deliver_message,
)
from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.conversation import MessageDTO, to_message_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.conversation_lifecycle import ConversationEvent, apply_event
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class SendConversationMessageCommand(Command[MessageDTO]):
    sender_id: UserId
    conversation_id: ConversationId
    content: Optional[str] = None
    attachment_url: Optional[str] = None


class SendConversationMessageHandler(CommandHandler[MessageDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: SendConversationMessageCommand) -> MessageDTO:
        content = clean_content(command.content, command.attachment_url)
        gate = self.engine.gate

        async with self.uow as uow:
            now = self.engine.clock.now()
            sender = await load_actor(uow, command.sender_id)
            conversation = await uow.conversations.get_by_id(command.conversation_id)
            if conversation is None:
                raise EntityNotFoundError("Conversation not found")
            enforce(
                gate.can_act(sender, Actions.VIEW_CONVERSATION, conversation),
                Actions.VIEW_CONVERSATION,
                self.engine.settings,
            )

            recipient = await uow.users.get_by_id(conversation.other_participant(sender.id))
            if recipient is None:
                raise EntityNotFoundError("Recipient not found")

            # A block can postdate the conversation, so check the edge itself.
            blocked = await uow.social.is_blocked_either(sender.id, recipient.id)
            decision = gate.can_act(
                sender,
                Actions.SEND_MESSAGE,
                recipient,
                blocked=blocked,
                follows_recipient=True,
                conversation=conversation,
            )
            enforce(decision, Actions.SEND_MESSAGE, self.engine.settings)

            apply_event(conversation, ConversationEvent.SEND)

            message = await deliver_message(
                uow,
                self.notifier,
                sender,
                recipient,
                conversation,
                content,
                command.attachment_url,
                now,
            )
            return to_message_dto(message)
