"""Messaging commands."""

from .send_direct_message import SendDirectMessageCommand, SendDirectMessageHandler
from .send_conversation_message import (
    SendConversationMessageCommand,
    SendConversationMessageHandler,
)
from .accept_conversation import AcceptConversationCommand, AcceptConversationHandler
from .decline_conversation import DeclineConversationCommand, DeclineConversationHandler

__all__ = [
    "SendDirectMessageCommand",
    "SendDirectMessageHandler",
    "SendConversationMessageCommand",
    "SendConversationMessageHandler",
    "AcceptConversationCommand",
    "AcceptConversationHandler",
    "DeclineConversationCommand",
    "DeclineConversationHandler",
]
