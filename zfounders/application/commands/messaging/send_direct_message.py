"""
Send Direct Message Command - the first-contact path.

Sends to a user rather than a conversation. Reuses the pair's conversation
when one exists; otherwise the message creates it, in REQUEST state for an
investor's cold outreach to a founder.
"""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.commands.messaging.delivery import (
    clean_content,
    deliver_message,
    reserve_message_quota,
)
from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import (
    PolicyEngine,
    enforce,
    load_actor,
    run_in_unit_of_work,
)
from zfounders.application.dto.conversation import (
    SendMessageResultDTO,
    to_conversation_dto,
    to_message_dto,
)
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.conversation_lifecycle import (
    ConversationEvent,
    apply_event,
    initial_state,
)
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_conversation_transition


@dataclass(frozen=True)
class SendDirectMessageCommand(Command[SendMessageResultDTO]):
    sender_id: UserId
    recipient_id: UserId
    content: Optional[str] = None
    attachment_url: Optional[str] = None


class SendDirectMessageHandler(CommandHandler[SendMessageResultDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: SendDirectMessageCommand) -> SendMessageResultDTO:
        content = clean_content(command.content, command.attachment_url)
        return await run_in_unit_of_work(self.uow, lambda: self._send(command, content))

    async def _send(
        self, command: SendDirectMessageCommand, content: Optional[str]
    ) -> SendMessageResultDTO:
        uow = self.uow
        now = self.engine.clock.now()

        sender = await load_actor(uow, command.sender_id)
        recipient = await uow.users.get_by_id(command.recipient_id)
        if recipient is None or not recipient.is_active:
            raise EntityNotFoundError("Recipient not found")

        blocked = await uow.social.is_blocked_either(sender.id, recipient.id)
        conversation = await uow.conversations.get_between(sender.id, recipient.id)
        follows = await uow.social.is_following(sender.id, recipient.id)

        decision = self.engine.gate.can_act(
            sender,
            Actions.SEND_MESSAGE,
            recipient,
            blocked=blocked,
            follows_recipient=follows,
            conversation=conversation,
        )
        enforce(decision, Actions.SEND_MESSAGE, self.engine.settings)

        await reserve_message_quota(uow, self.engine, sender, recipient, now)

        if conversation is None:
            has_accepted = False
            if sender.is_investor:
                has_accepted = await uow.interests.has_accepted(sender.id, recipient.id)
            status, is_revealed = initial_state(sender, recipient, has_accepted)
            conversation = await uow.conversations.add(
                Conversation.start(sender.id, recipient.id, status, is_revealed, now)
            )
            from_status = "NONE"
        else:
            from_status = apply_event(conversation, ConversationEvent.SEND).previous.value

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

        to_status = conversation.status.value
        if from_status != to_status:

            async def record() -> None:
                increment_conversation_transition(from_status, to_status)

            uow.on_commit(record)

        return SendMessageResultDTO(
            conversation=to_conversation_dto(conversation),
            message=to_message_dto(message),
            status=conversation.status.value,
        )
