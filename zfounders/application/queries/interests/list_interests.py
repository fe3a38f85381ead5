"""Received / sent express-interest listings."""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Query, QueryHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.application.dto.interest import InterestDTO, to_interest_dto
from zfounders.application.dto.user import to_user_summary
from zfounders.domain.exceptions import AccessDeniedError
from zfounders.domain.policies.reveal import RevealLedger
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import InterestStatus
from zfounders.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListReceivedInterestsQuery(Query[list[InterestDTO]]):
    founder_id: UserId
    status: Optional[InterestStatus] = None


@dataclass(frozen=True)
class ListSentInterestsQuery(Query[list[InterestDTO]]):
    investor_id: UserId


class ListReceivedInterestsHandler(QueryHandler[list[InterestDTO]]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: ListReceivedInterestsQuery) -> list[InterestDTO]:
        async with self.uow as uow:
            founder = await load_actor(uow, query.founder_id)
            interests = await uow.interests.list_received(founder.id, query.status)
            ledger = RevealLedger(uow.reveals)

            result = []
            for interest in interests:
                investor = await uow.users.get_by_id(interest.investor_id)
                summary = None
                if investor is not None:
                    # An accepted interest is itself a reveal context.
                    visible = await ledger.can_see_investor(
                        investor, founder.id, contextual=interest.is_accepted
                    )
                    summary = to_user_summary(investor, visible)
                result.append(to_interest_dto(interest, investor=summary))
            return result


class ListSentInterestsHandler(QueryHandler[list[InterestDTO]]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, query: ListSentInterestsQuery) -> list[InterestDTO]:
        async with self.uow as uow:
            investor = await load_actor(uow, query.investor_id)
            if not investor.is_investor:
                raise AccessDeniedError(
                    "Only investors can view sent interests", reason="account_type"
                )
            if not investor.is_approved_investor:
                raise AccessDeniedError(
                    "Verify your profile to view sent interests.",
                    reason="verification_required",
                    hint="verify",
                )
            interests = await uow.interests.list_sent(investor.id)
            return [to_interest_dto(interest) for interest in interests]
