"""
Get Conversation Messages Query.

Pages newest-first, returns each page in chronological order, and marks
the reader's unread inbound messages as read. Messages the reader sent are
never touched.
"""

from dataclasses import dataclass

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.conversation import (
    ConversationMessagesDTO,
    to_message_dto,
)
from zfounders.application.queries.conversations.list_conversations import (
    describe_conversation,
)
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetConversationMessagesQuery(Query[ConversationMessagesDTO]):
    user_id: UserId
    conversation_id: ConversationId
    limit: int = 50
    offset: int = 0


class GetConversationMessagesHandler(QueryHandler[ConversationMessagesDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(
        self, query: GetConversationMessagesQuery
    ) -> ConversationMessagesDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            reader = await load_actor(uow, query.user_id)
            conversation = await uow.conversations.get_by_id(query.conversation_id)
            if conversation is None:
                raise EntityNotFoundError("Conversation not found")
            enforce(
                self.engine.gate.can_act(reader, Actions.VIEW_CONVERSATION, conversation),
                Actions.VIEW_CONVERSATION,
                self.engine.settings,
            )

            page = await uow.messages.list_newest_first(
                conversation.id, query.limit, query.offset
            )
            page.reverse()
            await uow.messages.mark_read(conversation.id, reader.id, now)
            for message in page:
                if message.sender_id != reader.id and message.read_at is None:
                    message.read_at = now

            return ConversationMessagesDTO(
                conversation=await describe_conversation(uow, reader, conversation),
                messages=[to_message_dto(m) for m in page],
            )
