"""
Message Entity - A single entry in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.message_id import MessageId
from zfounders.domain.value_objects.user_id import UserId


@dataclass
class Message:
    id: MessageId
    conversation_id: ConversationId
    sender_id: UserId
    created_at: datetime
    content: Optional[str] = None
    attachment_url: Optional[str] = None
    read_at: Optional[datetime] = None

    def __post_init__(self):
        if not (self.content or self.attachment_url):
            raise ValueError("Message needs content or an attachment")

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        sender_id: UserId,
        now: datetime,
        content: Optional[str] = None,
        attachment_url: Optional[str] = None,
    ) -> Message:
        return cls(
            id=MessageId.new(),
            conversation_id=conversation_id,
            sender_id=sender_id,
            created_at=now,
            content=content,
            attachment_url=attachment_url,
        )

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def preview(self, length: int = 50) -> str:
        if not self.content:
            return "Sent an attachment"
        if len(self.content) <= length:
            return self.content
        return self.content[:length] + "..."
