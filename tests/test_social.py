import pytest

from zfounders.application.commands.messaging import (
    SendDirectMessageCommand,
    SendDirectMessageHandler,
)
from zfounders.application.commands.social import (
    BlockUserCommand,
    BlockUserHandler,
    FollowUserCommand,
    FollowUserHandler,
    UnblockUserCommand,
    UnblockUserHandler,
    UnfollowUserCommand,
    UnfollowUserHandler,
)
from zfounders.application.queries.users import (
    GetProfileHandler,
    GetProfileQuery,
    ListBlockedUsersHandler,
    ListBlockedUsersQuery,
)
from zfounders.domain.entities import ProfileReveal
from zfounders.domain.exceptions import AccessDeniedError, DomainValidationError
from zfounders.domain.value_objects import AccountType, ConversationStatus, NotificationType
from zfounders.infrastructure.persistence.memory import MemoryUnitOfWork

from tests.conftest import START, make_user


@pytest.fixture()
def follow(store, engine, notifier):
    async def _follow(actor, target):
        handler = FollowUserHandler(MemoryUnitOfWork(store), engine, notifier)
        return await handler.execute(FollowUserCommand(actor.id, target.id))

    return _follow


@pytest.fixture()
def block(store, engine):
    async def _block(actor, target):
        handler = BlockUserHandler(MemoryUnitOfWork(store), engine)
        return await handler.execute(BlockUserCommand(actor.id, target.id))

    return _block


@pytest.fixture()
def unblock(store):
    async def _unblock(actor, target):
        handler = UnblockUserHandler(MemoryUnitOfWork(store))
        return await handler.execute(UnblockUserCommand(actor.id, target.id))

    return _unblock


async def test_follow_is_idempotent_and_notifies_once(store, follow):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    assert await follow(a, b) is True
    assert await follow(a, b) is False
    followers = [n for n in store.notifications if n.type == NotificationType.NEW_FOLLOWER]
    assert len(followers) == 1
    assert followers[0].user_id == b.id


async def test_unfollow(store, follow):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    await follow(a, b)
    handler = UnfollowUserHandler(MemoryUnitOfWork(store))
    assert await handler.execute(UnfollowUserCommand(a.id, b.id)) is True
    assert store.follows == {}


async def test_private_investor_cannot_be_followed(store, follow):
    founder = make_user(store, AccountType.FOUNDER)
    investor = make_user(store, AccountType.INVESTOR)
    with pytest.raises(AccessDeniedError) as exc_info:
        await follow(founder, investor)
    assert exc_info.value.message == "Cannot follow private investor profiles"


async def test_block_removes_follows_and_prevents_new_ones(store, follow, block):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    await follow(a, b)
    await follow(b, a)

    await block(a, b)

    assert store.follows == {}
    for actor, target in ((a, b), (b, a)):
        with pytest.raises(AccessDeniedError):
            await follow(actor, target)


async def test_cannot_block_self(store, block):
    a = make_user(store, AccountType.FOUNDER)
    with pytest.raises(DomainValidationError):
        await block(a, a)


async def test_unblock_restores_conversation_once_no_block_remains(
    store, engine, notifier, block, unblock
):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    handler = SendDirectMessageHandler(MemoryUnitOfWork(store), engine, notifier)
    await handler.execute(SendDirectMessageCommand(a.id, b.id, "hi"))

    await block(a, b)
    await block(b, a)
    [conversation] = store.conversations.values()
    assert conversation.status == ConversationStatus.BLOCKED

    assert await unblock(a, b) is True
    assert next(iter(store.conversations.values())).status == ConversationStatus.BLOCKED

    assert await unblock(b, a) is True
    assert next(iter(store.conversations.values())).status == ConversationStatus.ACTIVE

    assert await unblock(b, a) is False


async def test_block_list(store, engine, block):
    a = make_user(store, AccountType.FOUNDER)
    b = make_user(store, AccountType.BUILDER)
    await block(a, b)
    result = await ListBlockedUsersHandler(MemoryUnitOfWork(store)).execute(
        ListBlockedUsersQuery(a.id)
    )
    assert [row.blocked_id for row in result.blocked] == [b.id.value]


class TestProfile:
    async def fetch(self, store, engine, user, viewer=None):
        handler = GetProfileHandler(MemoryUnitOfWork(store), engine)
        return await handler.execute(GetProfileQuery(user.id, viewer.id if viewer else None))

    async def test_private_investor_profile_shows_firm_and_stages_only(self, store, engine):
        investor = make_user(
            store, AccountType.INVESTOR, firm="Hidden LP", display_name="Sam"
        )
        founder = make_user(store, AccountType.FOUNDER)
        profile = await self.fetch(store, engine, investor, founder)
        assert profile.is_private
        assert profile.firm == "Hidden LP"
        assert profile.stages == ["seed"]
        assert profile.display_name is None
        assert profile.email is None

    async def test_revealed_investor_profile_is_full(self, store, engine):
        investor = make_user(store, AccountType.INVESTOR, display_name="Sam")
        founder = make_user(store, AccountType.FOUNDER)
        store.reveals[(investor.id.value, founder.id.value)] = ProfileReveal(
            investor.id, founder.id, START
        )
        profile = await self.fetch(store, engine, investor, founder)
        assert not profile.is_private
        assert profile.display_name == "Sam"

    async def test_is_following_flag(self, store, engine, follow):
        a = make_user(store, AccountType.FOUNDER)
        b = make_user(store, AccountType.BUILDER)
        await follow(a, b)
        assert (await self.fetch(store, engine, b, a)).is_following
        assert not (await self.fetch(store, engine, a, b)).is_following
