"""Conversation-related queries."""

from zfounders.application.queries.conversations.list_conversations import (
    ListConversationsQuery,
    ListConversationsHandler,
    ListMessageRequestsQuery,
    ListMessageRequestsHandler,
)
from zfounders.application.queries.conversations.get_conversation_messages import (
    GetConversationMessagesQuery,
    GetConversationMessagesHandler,
)

__all__ = [
    "ListConversationsQuery",
    "ListConversationsHandler",
    "ListMessageRequestsQuery",
    "ListMessageRequestsHandler",
    "GetConversationMessagesQuery",
    "GetConversationMessagesHandler",
]
