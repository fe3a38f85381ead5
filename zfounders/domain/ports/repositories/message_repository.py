"""
Message Repository Port - Interface for message persistence.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from zfounders.domain.entities.message import Message
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.user_id import UserId


class MessageRepository(ABC):
    @abstractmethod
    async def add(self, message: Message) -> None: ...

    @abstractmethod
    async def list_newest_first(
        self, conversation_id: ConversationId, limit: int, offset: int = 0
    ) -> list[Message]: ...

    @abstractmethod
    async def latest(self, conversation_id: ConversationId) -> Optional[Message]: ...

    @abstractmethod
    async def count_unread(
        self, conversation_id: ConversationId, reader_id: UserId
    ) -> int: ...

    @abstractmethod
    async def mark_read(
        self, conversation_id: ConversationId, reader_id: UserId, now: datetime
    ) -> int:
        """Mark unread messages not authored by ``reader_id``. Returns the count."""
        ...

    @abstractmethod
    async def delete_for_conversation(self, conversation_id: ConversationId) -> int: ...
