from zfounders.domain.policies import RevealLedger, reveals_on_comment
from zfounders.domain.value_objects import AccountType

from tests.conftest import START, make_user


async def test_reveal_is_one_way_and_idempotent(store, uow):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    other = make_user(store, AccountType.FOUNDER)

    async with uow:
        ledger = RevealLedger(uow.reveals)
        assert await ledger.reveal(investor.id, founder.id, START)
        assert not await ledger.reveal(investor.id, founder.id, START)

        assert await ledger.can_see_investor(investor, founder.id)
        assert not await ledger.can_see_investor(investor, other.id)
        assert not await ledger.is_revealed_to(founder.id, investor.id)
    assert len(store.reveals) == 1


async def test_public_investor_is_always_visible(store, uow):
    investor = make_user(store, AccountType.INVESTOR, public=True)
    async with uow:
        assert await RevealLedger(uow.reveals).can_see_investor(investor, None)


async def test_private_investor_hidden_from_anonymous(store, uow):
    investor = make_user(store, AccountType.INVESTOR)
    async with uow:
        ledger = RevealLedger(uow.reveals)
        assert not await ledger.can_see_investor(investor, None)
        assert await ledger.can_see_investor(investor, investor.id)


async def test_contextual_reveal(store, uow):
    investor = make_user(store, AccountType.INVESTOR)
    founder = make_user(store, AccountType.FOUNDER)
    async with uow:
        ledger = RevealLedger(uow.reveals)
        assert await ledger.can_see_investor(investor, founder.id, contextual=True)
    assert store.reveals == {}


def test_comment_reveal_rule(store):
    private = make_user(store, AccountType.INVESTOR)
    public = make_user(store, AccountType.INVESTOR, public=True)
    founder = make_user(store, AccountType.FOUNDER)
    assert reveals_on_comment(private, founder.id)
    assert not reveals_on_comment(private, private.id)
    assert not reveals_on_comment(public, founder.id)
    assert not reveals_on_comment(founder, private.id)
