"""
Shared send steps: quota reservation and message delivery.

Only the direct path reserves quota; replies sent into an existing
conversation by id are never metered. Both steps run inside the caller's
unit of work, so a failure after the reservation rolls it back.
"""

import logging
from datetime import datetime
from typing import Optional

from zfounders.application.common.policy import PolicyEngine, enforce
from zfounders.application.services.notification_emitter import (
    NotificationEmitter,
    preview,
)
from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.entities.message import Message
from zfounders.domain.entities.user import User
from zfounders.domain.exceptions import DomainValidationError
from zfounders.domain.policies.decision import DenialKind
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import ConversationStatus, NotificationType
from zfounders.observability.metrics import QuotaOutcome, increment_quota_outcome

logger = logging.getLogger(__name__)


def clean_content(content: Optional[str], attachment_url: Optional[str]) -> Optional[str]:
    text = content.strip() if content else None
    if not text and not attachment_url:
        raise DomainValidationError("Message content is required")
    return text or None


async def reserve_message_quota(
    uow: UnitOfWork, engine: PolicyEngine, sender: User, recipient: User, now: datetime
) -> None:
    decision = await engine.quota.check_and_reserve(
        uow.message_limits, sender, recipient.account_type, now
    )
    if decision.allowed:
        outcome = (
            QuotaOutcome.RESERVED if decision.reason == "reserved" else QuotaOutcome.UNMETERED
        )
    elif decision.kind == DenialKind.QUOTA:
        outcome = QuotaOutcome.REJECTED
    else:
        outcome = None
    if outcome is not None:
        increment_quota_outcome(outcome)
    enforce(decision, Actions.SEND_MESSAGE, engine.settings)


async def deliver_message(
    uow: UnitOfWork,
    notifier: NotificationEmitter,
    sender: User,
    recipient: User,
    conversation: Conversation,
    content: Optional[str],
    attachment_url: Optional[str],
    now: datetime,
) -> Message:
    message = Message.create(
        conversation_id=conversation.id,
        sender_id=sender.id,
        now=now,
        content=content,
        attachment_url=attachment_url,
    )
    await uow.messages.add(message)
    conversation.touch(now)
    await uow.conversations.save(conversation)

    if conversation.status == ConversationStatus.REQUEST:
        notification_type, title = NotificationType.MESSAGE_REQUEST, "Message Request"
    else:
        notification_type, title = NotificationType.NEW_MESSAGE, "New Message"
    await notifier.notify(
        uow,
        recipient.id,
        notification_type,
        title,
        preview(content) if content else "Sent an attachment",
        now,
        data={"conversationId": conversation.id.value, "messageId": message.id.value},
    )
    logger.info(
        "[Conversation] %s message in %s (%s)",
        notification_type.value,
        conversation.id,
        conversation.status.value,
    )
    return message
