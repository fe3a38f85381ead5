"""Conversation and message DTOs for API request/response."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from zfounders.application.dto.user import UserSummaryDTO
from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.entities.message import Message


class MessageDTO(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: Optional[str] = None
    attachment_url: Optional[str] = None
    created_at: datetime
    read_at: Optional[datetime] = None


class ConversationDTO(BaseModel):
    id: str
    status: str
    is_revealed: bool
    created_at: datetime
    last_message_at: Optional[datetime] = None
    other_participant: Optional[UserSummaryDTO] = None
    last_message: Optional[str] = None
    unread_count: int = 0


class ConversationListDTO(BaseModel):
    conversations: list[ConversationDTO]
    total: int


class ConversationMessagesDTO(BaseModel):
    conversation: ConversationDTO
    messages: list[MessageDTO]


class SendMessageResultDTO(BaseModel):
    conversation: ConversationDTO
    message: MessageDTO
    status: str


def to_message_dto(message: Message) -> MessageDTO:
    return MessageDTO(
        id=message.id.value,
        conversation_id=message.conversation_id.value,
        sender_id=message.sender_id.value,
        content=message.content,
        attachment_url=message.attachment_url,
        created_at=message.created_at,
        read_at=message.read_at,
    )


def to_conversation_dto(
    conversation: Conversation,
    other: Optional[UserSummaryDTO] = None,
    last_message: Optional[str] = None,
    unread_count: int = 0,
) -> ConversationDTO:
    return ConversationDTO(
        id=conversation.id.value,
        status=conversation.status.value,
        is_revealed=conversation.is_revealed,
        created_at=conversation.created_at,
        last_message_at=conversation.last_message_at,
        other_participant=other,
        last_message=last_message,
        unread_count=unread_count,
    )
