"""
Prisma Conversation Repository Implementation.

The sorted pair is stored in participant_low / participant_high under a
unique index, so "one conversation per unordered pair" is enforced by the
database; a lost race surfaces as ConcurrencyConflictError.
"""

from typing import Optional

from prisma import Prisma
from prisma.errors import UniqueViolationError
from prisma.models import Conversation as PrismaConversation

from zfounders.domain.entities.conversation import Conversation, pair_key
from zfounders.domain.exceptions import ConcurrencyConflictError
from zfounders.domain.ports.repositories import ConversationRepository
from zfounders.domain.value_objects import ConversationId, ConversationStatus, UserId


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaConversation) -> Conversation:
        """Map Prisma record to domain entity."""
        return Conversation(
            id=ConversationId(record.id),
            participant1_id=UserId(record.participant1_id),
            participant2_id=UserId(record.participant2_id),
            status=ConversationStatus(record.status),
            is_revealed=record.is_revealed,
            created_at=record.created_at,
            last_message_at=record.last_message_at,
            pre_block_status=(
                ConversationStatus(record.pre_block_status)
                if record.pre_block_status
                else None
            ),
        )

    def _mutable_fields(self, conversation: Conversation) -> dict:
        return {
            "status": conversation.status.value,
            "pre_block_status": (
                conversation.pre_block_status.value
                if conversation.pre_block_status
                else None
            ),
            "is_revealed": conversation.is_revealed,
            "last_message_at": conversation.last_message_at,
        }

    async def get_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        record = await self._prisma.conversation.find_unique(
            where={"id": conversation_id.value}
        )
        return self._to_entity(record) if record else None

    async def get_between(self, a: UserId, b: UserId) -> Optional[Conversation]:
        low, high = pair_key(a, b)
        record = await self._prisma.conversation.find_unique(
            where={"participant_low_participant_high": {
                "participant_low": low,
                "participant_high": high,
            }}
        )
        return self._to_entity(record) if record else None

    async def add(self, conversation: Conversation) -> Conversation:
        low, high = conversation.key
        try:
            await self._prisma.conversation.create(
                data={
                    "id": conversation.id.value,
                    "participant1_id": conversation.participant1_id.value,
                    "participant2_id": conversation.participant2_id.value,
                    "participant_low": low,
                    "participant_high": high,
                    "created_at": conversation.created_at,
                    **self._mutable_fields(conversation),
                }
            )
        except UniqueViolationError as exc:
            raise ConcurrencyConflictError(
                "Conversation already exists for this pair"
            ) from exc
        return conversation

    async def save(self, conversation: Conversation) -> None:
        await self._prisma.conversation.update(
            where={"id": conversation.id.value},
            data=self._mutable_fields(conversation),
        )

    async def delete(self, conversation_id: ConversationId) -> bool:
        record = await self._prisma.conversation.delete(
            where={"id": conversation_id.value}
        )
        return record is not None

    async def list_for_user(
        self, user_id: UserId, status: Optional[ConversationStatus] = None
    ) -> list[Conversation]:
        where: dict = {
            "OR": [
                {"participant1_id": user_id.value},
                {"participant2_id": user_id.value},
            ]
        }
        if status is not None:
            where["status"] = status.value
        records = await self._prisma.conversation.find_many(
            where=where, order={"created_at": "desc"}
        )
        return [self._to_entity(r) for r in records]
