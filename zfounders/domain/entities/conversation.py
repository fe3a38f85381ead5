"""
Conversation Entity - A two-party dialogue and its lifecycle state.

State changes go through the lifecycle table in
``zfounders.domain.policies.conversation_lifecycle``; the entity only applies
the result.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from zfounders.domain.value_objects.conversation_id import ConversationId
from zfounders.domain.value_objects.enums import ConversationStatus
from zfounders.domain.value_objects.user_id import UserId


def pair_key(a: UserId, b: UserId) -> tuple[str, str]:
    """Order-independent key for an unordered participant pair."""
    return tuple(sorted((a.value, b.value)))  # type: ignore[return-value]


@dataclass
class Conversation:
    id: ConversationId
    participant1_id: UserId  # initiator
    participant2_id: UserId  # recipient
    status: ConversationStatus
    is_revealed: bool
    created_at: datetime
    last_message_at: Optional[datetime] = None
    pre_block_status: Optional[ConversationStatus] = None

    @classmethod
    def start(
        cls,
        initiator_id: UserId,
        recipient_id: UserId,
        status: ConversationStatus,
        is_revealed: bool,
        now: datetime,
    ) -> Conversation:
        if initiator_id == recipient_id:
            raise ValueError("Cannot start a conversation with yourself")
        return cls(
            id=ConversationId.new(),
            participant1_id=initiator_id,
            participant2_id=recipient_id,
            status=status,
            is_revealed=is_revealed,
            created_at=now,
        )

    @property
    def key(self) -> tuple[str, str]:
        return pair_key(self.participant1_id, self.participant2_id)

    def has_participant(self, user_id: UserId) -> bool:
        return user_id in (self.participant1_id, self.participant2_id)

    def other_participant(self, user_id: UserId) -> UserId:
        if user_id == self.participant1_id:
            return self.participant2_id
        if user_id == self.participant2_id:
            return self.participant1_id
        raise ValueError(f"User {user_id} is not a participant")

    def touch(self, now: datetime) -> None:
        self.last_message_at = now
