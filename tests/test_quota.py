from datetime import datetime, timezone

import pytest

from zfounders.application.commands.messaging import (
    AcceptConversationCommand,
    AcceptConversationHandler,
    SendConversationMessageCommand,
    SendConversationMessageHandler,
    SendDirectMessageCommand,
    SendDirectMessageHandler,
)
from zfounders.domain.exceptions import QuotaExceededError
from zfounders.domain.policies import QuotaLedger
from zfounders.domain.value_objects import AccountType, ConversationId, SubscriptionTier
from zfounders.infrastructure.persistence.memory import MemoryUnitOfWork

from tests.conftest import START, make_user


@pytest.fixture()
def ledger(settings):
    return QuotaLedger(settings)


class TestEvaluate:
    def test_founder_to_investor_is_metered(self, ledger, store):
        founder = make_user(store, AccountType.FOUNDER)
        check = ledger.evaluate(founder, AccountType.INVESTOR, START)
        assert check.metered
        assert check.cap == 3

    def test_builder_cap(self, ledger, store):
        builder = make_user(store, AccountType.BUILDER)
        assert ledger.evaluate(builder, AccountType.INVESTOR, START).cap == 5

    def test_non_investor_target_is_unmetered(self, ledger, store):
        founder = make_user(store, AccountType.FOUNDER)
        check = ledger.evaluate(founder, AccountType.BUILDER, START)
        assert check.decision.allowed
        assert not check.metered

    def test_premium_is_unmetered(self, ledger, store):
        founder = make_user(store, AccountType.FOUNDER, tier=SubscriptionTier.FOUNDER_PRO)
        check = ledger.evaluate(founder, AccountType.INVESTOR, START)
        assert check.decision.reason == "premium"
        assert not check.metered

    def test_verified_investor_is_unlimited(self, ledger, store):
        investor = make_user(store, AccountType.INVESTOR)
        check = ledger.evaluate(investor, AccountType.INVESTOR, START)
        assert check.decision.reason == "investor_unlimited"

    def test_lurker_and_unverified_investor_are_denied(self, ledger, store):
        lurker = make_user(store, AccountType.LURKER)
        pending = make_user(store, AccountType.INVESTOR, verified=False)
        assert ledger.evaluate(lurker, AccountType.FOUNDER, START).decision.reason == "account_type"
        decision = ledger.evaluate(pending, AccountType.FOUNDER, START).decision
        assert decision.reason == "verification_required"


class TestMonthlyCap:
    async def send(self, store, engine, notifier, sender, recipient, text="hello"):
        handler = SendDirectMessageHandler(MemoryUnitOfWork(store), engine, notifier)
        return await handler.execute(
            SendDirectMessageCommand(sender.id, recipient.id, text)
        )

    async def test_fourth_message_is_rejected_until_next_month(
        self, store, engine, notifier, clock
    ):
        founder = make_user(store, AccountType.FOUNDER)
        investors = [make_user(store, AccountType.INVESTOR, public=True) for _ in range(4)]

        for investor in investors[:3]:
            await self.send(store, engine, notifier, founder, investor)

        with pytest.raises(QuotaExceededError) as exc_info:
            await self.send(store, engine, notifier, founder, investors[3])
        assert exc_info.value.resets_at == datetime(2025, 4, 1, tzinfo=timezone.utc)
        assert exc_info.value.upgrade_url

        # Nothing from the rejected attempt was persisted.
        assert len(store.conversations) == 3
        assert len(store.messages) == 3
        assert store.message_limits[(founder.id.value, "monthly")].count == 3

        clock.set(datetime(2025, 4, 1, 0, 0, 1, tzinfo=timezone.utc))
        result = await self.send(store, engine, notifier, founder, investors[3])
        assert result.status == "ACTIVE"
        limit = store.message_limits[(founder.id.value, "monthly")]
        assert limit.count == 1
        assert limit.resets_at == datetime(2025, 5, 1, tzinfo=timezone.utc)

    async def test_repeat_direct_sends_to_same_investor_count_against_quota(
        self, store, engine, notifier
    ):
        founder = make_user(store, AccountType.FOUNDER)
        investor = make_user(store, AccountType.INVESTOR)
        for _ in range(3):
            await self.send(store, engine, notifier, founder, investor)
        with pytest.raises(QuotaExceededError):
            await self.send(store, engine, notifier, founder, investor)

    async def test_replies_inside_a_conversation_are_not_metered(
        self, store, engine, notifier
    ):
        investor = make_user(store, AccountType.INVESTOR)
        founder = make_user(store, AccountType.FOUNDER)
        opened = await self.send(store, engine, notifier, investor, founder)
        conversation_id = ConversationId(opened.conversation.id)
        await AcceptConversationHandler(MemoryUnitOfWork(store), engine, notifier).execute(
            AcceptConversationCommand(founder.id, conversation_id)
        )

        for n in range(5):
            handler = SendConversationMessageHandler(
                MemoryUnitOfWork(store), engine, notifier
            )
            await handler.execute(
                SendConversationMessageCommand(founder.id, conversation_id, f"reply {n}")
            )

        assert store.message_limits == {}
        assert len(store.messages) == 6

        # A new investor contact still draws on the full monthly allowance.
        others = [make_user(store, AccountType.INVESTOR, public=True) for _ in range(3)]
        for other in others:
            await self.send(store, engine, notifier, founder, other)
        assert store.message_limits[(founder.id.value, "monthly")].count == 3

    async def test_messages_to_founders_are_free(self, store, engine, notifier):
        founder = make_user(store, AccountType.FOUNDER)
        peer = make_user(store, AccountType.FOUNDER)
        for _ in range(5):
            await self.send(store, engine, notifier, founder, peer)
        assert store.message_limits == {}

    async def test_failed_send_after_reservation_rolls_back(
        self, store, engine, notifier
    ):
        founder = make_user(store, AccountType.FOUNDER)
        investor = make_user(store, AccountType.INVESTOR)
        investor_id = investor.id

        class FailingUoW(MemoryUnitOfWork):
            def __init__(self, store):
                super().__init__(store)
                original = self.messages.add

                async def add(message):
                    await original(message)
                    raise RuntimeError("disk full")

                self.messages.add = add

        handler = SendDirectMessageHandler(FailingUoW(store), engine, notifier)
        with pytest.raises(RuntimeError):
            await handler.execute(SendDirectMessageCommand(founder.id, investor_id, "hi"))

        assert store.message_limits == {}
        assert store.messages == {}
        assert store.conversations == {}
