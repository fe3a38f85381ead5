"""
Conversation Repository Port - Interface for conversation persistence.

At most one conversation exists per unordered participant pair;
``get_between`` must match either ordering.
"""

from abc import ABC, abstractmethod
from typing import Optional

from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.enums import ConversationStatus
from zfounders.domain.value_objects.user_id import UserId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def get_between(self, a: UserId, b: UserId) -> Optional[Conversation]: ...

    @abstractmethod
    async def add(self, conversation: Conversation) -> Conversation:
        """Insert a new conversation.

        Raises ConcurrencyConflictError when another writer created the
        pair's conversation first.
        """
        ...

    @abstractmethod
    async def save(self, conversation: Conversation) -> None: ...

    @abstractmethod
    async def delete(self, conversation_id: ConversationId) -> bool: ...

    @abstractmethod
    async def list_for_user(
        self, user_id: UserId, status: Optional[ConversationStatus] = None
    ) -> list[Conversation]: ...
