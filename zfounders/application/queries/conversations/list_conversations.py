"""
List Conversations Query.

The other participant is redacted to a stub when it is a private investor
that has not been revealed to the reader, either through the reveal ledger
or through the conversation's own reveal flag.
"""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.application.dto.conversation import (
    ConversationDTO,
    ConversationListDTO,
    to_conversation_dto,
)
from zfounders.application.dto.user import to_user_summary
from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.entities.user import User
from zfounders.domain.policies.reveal import RevealLedger
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import ConversationStatus
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListConversationsQuery(Query[ConversationListDTO]):
    user_id: UserId
    status: Optional[ConversationStatus] = None


@dataclass(frozen=True)
class ListMessageRequestsQuery(Query[ConversationListDTO]):
    user_id: UserId


async def describe_conversation(
    uow: UnitOfWork, reader: User, conversation: Conversation
) -> ConversationDTO:
    other = await uow.users.get_by_id(conversation.other_participant(reader.id))
    summary = None
    if other is not None:
        visible = await RevealLedger(uow.reveals).can_see_investor(
            other, reader.id, contextual=conversation.is_revealed
        )
        summary = to_user_summary(other, visible)
    latest = await uow.messages.latest(conversation.id)
    unread = await uow.messages.count_unread(conversation.id, reader.id)
    return to_conversation_dto(
        conversation,
        other=summary,
        last_message=latest.preview() if latest else None,
        unread_count=unread,
    )


def _recency(conversation: Conversation):
    return conversation.last_message_at or conversation.created_at


class ListConversationsHandler(QueryHandler[ConversationListDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: ListConversationsQuery) -> ConversationListDTO:
        async with self.uow as uow:
            reader = await load_actor(uow, query.user_id)
            conversations = await uow.conversations.list_for_user(reader.id, query.status)
            conversations.sort(key=_recency, reverse=True)
            items = [await describe_conversation(uow, reader, c) for c in conversations]
            return ConversationListDTO(conversations=items, total=len(items))


class ListMessageRequestsHandler(QueryHandler[ConversationListDTO]):
    """Incoming REQUEST conversations awaiting the reader's answer."""

    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: ListMessageRequestsQuery) -> ConversationListDTO:
        async with self.uow as uow:
            reader = await load_actor(uow, query.user_id)
            conversations = await uow.conversations.list_for_user(
                reader.id, ConversationStatus.REQUEST
            )
            incoming = [c for c in conversations if c.participant2_id == reader.id]
            incoming.sort(key=_recency, reverse=True)
            items = [await describe_conversation(uow, reader, c) for c in incoming]
            return ConversationListDTO(conversations=items, total=len(items))
