"""
Express Interest Command.

A verified investor flags interest in a founder's video. The row is keyed by
(investor, founder, video); repeating the action resets it to pending
rather than creating a duplicate.
"""

from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.interest import InterestDTO, to_interest_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.interest import ExpressInterest
from zfounders.domain.exceptions import DomainValidationError, EntityNotFoundError
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import NotificationType
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass(frozen=True)
class ExpressInterestCommand(Command[InterestDTO]):
    investor_id: UserId
    founder_id: UserId
    video_id: VideoId
    message: Optional[str] = None


class ExpressInterestHandler(CommandHandler[InterestDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: ExpressInterestCommand) -> InterestDTO:
        gate, settings = self.engine.gate, self.engine.settings

        async with self.uow as uow:
            now = self.engine.clock.now()
            investor = await load_actor(uow, command.investor_id)

            video = await uow.videos.get_by_id(command.video_id)
            if video is None:
                raise EntityNotFoundError("Video not found")
            founder = await uow.users.get_by_id(command.founder_id)
            if founder is None or not founder.is_active:
                raise EntityNotFoundError("Founder not found")
            if video.user_id != founder.id:
                raise DomainValidationError("Video does not belong to this founder")

            blocked = await uow.social.is_blocked_either(investor.id, founder.id)
            enforce(
                gate.can_act(investor, Actions.EXPRESS_INTEREST, founder, blocked=blocked),
                Actions.EXPRESS_INTEREST,
                settings,
            )
            enforce(
                gate.can_act(investor, Actions.VIEW_VIDEO, video),
                Actions.VIEW_VIDEO,
                settings,
            )

            interest = await uow.interests.upsert(
                ExpressInterest.create(
                    investor.id, founder.id, video.id, now, message=command.message
                )
            )

            profile = investor.investor_profile
            is_public = not investor.is_private_investor
            if is_public:
                body = f"{(profile.firm if profile else None) or 'An investor'} is interested in your pitch"
            else:
                body = "A verified investor is interested in your pitch"
            await self.notifier.notify(
                uow,
                founder.id,
                NotificationType.EXPRESS_INTEREST,
                "Investor Interested!",
                body,
                now,
                data={
                    "interestId": interest.id.value,
                    "investorId": investor.id.value,
                    "videoId": video.id.value,
                    "isPublic": is_public,
                },
            )
            return to_interest_dto(interest)
