"""Prisma Message Repository Implementation."""

from datetime import datetime
from typing import Optional

from prisma import Prisma
from prisma.models import Message as PrismaMessage

from zfounders.domain.entities.message import Message
from zfounders.domain.ports.repositories import MessageRepository
from zfounders.domain.value_objects import ConversationId, MessageId, UserId


class PrismaMessageRepository(MessageRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaMessage) -> Message:
        return Message(
            id=MessageId(record.id),
            conversation_id=ConversationId(record.conversation_id),
            sender_id=UserId(record.sender_id),
            created_at=record.created_at,
            content=record.content,
            attachment_url=record.attachment_url,
            read_at=record.read_at,
        )

    async def add(self, message: Message) -> None:
        await self._prisma.message.create(
            data={
                "id": message.id.value,
                "conversation_id": message.conversation_id.value,
                "sender_id": message.sender_id.value,
                "content": message.content,
                "attachment_url": message.attachment_url,
                "created_at": message.created_at,
            }
        )

    async def list_newest_first(
        self, conversation_id: ConversationId, limit: int, offset: int = 0
    ) -> list[Message]:
        records = await self._prisma.message.find_many(
            where={"conversation_id": conversation_id.value},
            order={"created_at": "desc"},
            take=limit,
            skip=offset,
        )
        return [self._to_entity(r) for r in records]

    async def latest(self, conversation_id: ConversationId) -> Optional[Message]:
        record = await self._prisma.message.find_first(
            where={"conversation_id": conversation_id.value},
            order={"created_at": "desc"},
        )
        return self._to_entity(record) if record else None

    async def count_unread(self, conversation_id: ConversationId, reader_id: UserId) -> int:
        return await self._prisma.message.count(
            where={
                "conversation_id": conversation_id.value,
                "sender_id": {"not": reader_id.value},
                "read_at": None,
            }
        )

    async def mark_read(
        self, conversation_id: ConversationId, reader_id: UserId, now: datetime
    ) -> int:
        return await self._prisma.message.update_many(
            where={
                "conversation_id": conversation_id.value,
                "sender_id": {"not": reader_id.value},
                "read_at": None,
            },
            data={"read_at": now},
        )

    async def delete_for_conversation(self, conversation_id: ConversationId) -> int:
        return await self._prisma.message.delete_many(
            where={"conversation_id": conversation_id.value}
        )
