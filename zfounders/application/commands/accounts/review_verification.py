"""Review Verification Command - moderation approves or rejects an investor."""

import logging
from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.user import ProfileDTO, to_profile
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.exceptions import DomainValidationError, EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationType
from zfounders.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewVerificationCommand(Command[ProfileDTO]):
    reviewer_id: UserId
    investor_id: UserId
    approve: bool
    notes: Optional[str] = None


class ReviewVerificationHandler(CommandHandler[ProfileDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: ReviewVerificationCommand) -> ProfileDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            reviewer = await load_actor(uow, command.reviewer_id)
            enforce(
                self.engine.gate.can_act(reviewer, Actions.REVIEW_VERIFICATION),
                Actions.REVIEW_VERIFICATION,
                self.engine.settings,
            )

            investor = await uow.users.get_by_id(command.investor_id)
            if investor is None:
                raise EntityNotFoundError("User not found")
            if not investor.is_investor or investor.verification is None:
                raise DomainValidationError("User has no investor verification")

            investor.verification.review(command.approve, command.notes, now)
            await uow.users.save(investor)

            if command.approve:
                title = "Investor Verification Approved!"
                body = "You can now access all investor features."
            else:
                title = "Verification Update"
                body = f"Your verification was not approved. {command.notes or ''}".strip()
            await self.notifier.notify(
                uow,
                investor.id,
                NotificationType.VERIFICATION_RESULT,
                title,
                body,
                now,
                data={"status": investor.verification.status.value},
            )
            logger.info(
                "[Moderation] %s set verification of %s to %s",
                reviewer.id,
                investor.id,
                investor.verification.status.value,
            )
            return to_profile(investor, visible=True)
