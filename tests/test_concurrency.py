import asyncio

import pytest

from zfounders.application.commands.messaging import (
    SendDirectMessageCommand,
    SendDirectMessageHandler,
)
from zfounders.domain.entities import Conversation
from zfounders.domain.exceptions import ConcurrencyConflictError, QuotaExceededError
from zfounders.domain.value_objects import AccountType, ConversationStatus
from zfounders.infrastructure.persistence.memory import MemoryUnitOfWork

from tests.conftest import START, make_user


def send(store, engine, notifier, sender, recipient, text="hello"):
    handler = SendDirectMessageHandler(MemoryUnitOfWork(store), engine, notifier)
    return handler.execute(SendDirectMessageCommand(sender.id, recipient.id, text))


async def test_concurrent_sends_reserve_exactly_the_cap(store, engine, notifier):
    founder = make_user(store, AccountType.FOUNDER)
    investors = [make_user(store, AccountType.INVESTOR, public=True) for _ in range(4)]

    results = await asyncio.gather(
        *(send(store, engine, notifier, founder, investor) for investor in investors),
        return_exceptions=True,
    )

    sent = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, Exception)]
    assert len(sent) == 3
    assert len(rejected) == 1
    assert isinstance(rejected[0], QuotaExceededError)
    assert store.message_limits[(founder.id.value, "monthly")].count == 3
    assert len(store.conversations) == 3
    assert len(store.messages) == 3


async def test_concurrent_first_contacts_share_one_conversation(store, engine, notifier):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)

    first, second = await asyncio.gather(
        send(store, engine, notifier, a, b, "hi"),
        send(store, engine, notifier, b, a, "hey"),
    )

    assert first.conversation.id == second.conversation.id
    assert len(store.conversations) == 1
    assert len(store.messages) == 2


async def test_lost_pair_race_is_retried_against_existing_row(store, engine, notifier):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    rival = Conversation.start(b.id, a.id, ConversationStatus.ACTIVE, True, START)

    class RacingUoW(MemoryUnitOfWork):
        def __init__(self, store):
            super().__init__(store)
            self.attempts = 0
            original = self.conversations.add

            async def add(conversation):
                self.attempts += 1
                if self.attempts == 1:
                    # Another worker commits the pair's row first.
                    store.conversations[rival.id.value] = rival
                    raise ConcurrencyConflictError("Conversation already exists for this pair")
                return await original(conversation)

            self.conversations.add = add

    uow = RacingUoW(store)
    result = await SendDirectMessageHandler(uow, engine, notifier).execute(
        SendDirectMessageCommand(a.id, b.id, "hi")
    )

    assert uow.attempts == 1
    assert result.conversation.id == rival.id.value
    assert list(store.conversations) == [rival.id.value]
    [message] = store.messages.values()
    assert message.conversation_id == rival.id
    assert len(store.notifications) == 1


async def test_conflict_on_every_attempt_surfaces(store, engine, notifier):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)

    class AlwaysConflictingUoW(MemoryUnitOfWork):
        def __init__(self, store):
            super().__init__(store)

            async def add(conversation):
                raise ConcurrencyConflictError("Conversation already exists for this pair")

            self.conversations.add = add

    handler = SendDirectMessageHandler(AlwaysConflictingUoW(store), engine, notifier)
    with pytest.raises(ConcurrencyConflictError):
        await handler.execute(SendDirectMessageCommand(a.id, b.id, "hi"))
    assert store.conversations == {}
    assert store.messages == {}
