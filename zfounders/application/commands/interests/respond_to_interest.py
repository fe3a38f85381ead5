"""
Respond To Interest Command.

The founder who owns the interest accepts or declines it. Accepting writes
a reveal fact and creates (or activates) the pair's conversation so the
investor can message straight away. Declining is silent.
"""

import logging
from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import (
    PolicyEngine,
    enforce,
    load_actor,
    run_in_unit_of_work,
)
from zfounders.application.dto.interest import InterestDTO, to_interest_dto
from zfounders.application.services.notification_emitter import NotificationEmitter
from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.exceptions import EntityNotFoundError
from zfounders.domain.policies.conversation_lifecycle import ConversationEvent, apply_event
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.policies.reveal import RevealLedger
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import ConversationStatus, NotificationType
from zfounders.domain.value_objects.interest_id import InterestId
from zfounders.domain.value_objects.user_id import UserId
from zfounders.observability.metrics import increment_conversation_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RespondToInterestCommand(Command[InterestDTO]):
    founder_id: UserId
    interest_id: InterestId
    accept: bool


class RespondToInterestHandler(CommandHandler[InterestDTO]):
    def __init__(
        self, uow: UnitOfWork, engine: PolicyEngine, notifier: NotificationEmitter
    ):
        self.uow = uow
        self.engine = engine
        self.notifier = notifier

    async def execute(self, command: RespondToInterestCommand) -> InterestDTO:
        return await run_in_unit_of_work(self.uow, lambda: self._respond(command))

    async def _respond(self, command: RespondToInterestCommand) -> InterestDTO:
        uow = self.uow
        now = self.engine.clock.now()
        founder = await load_actor(uow, command.founder_id)
        interest = await uow.interests.get_by_id(command.interest_id)
        if interest is None:
            raise EntityNotFoundError("Interest not found")

        blocked = False
        if command.accept:
            blocked = await uow.social.is_blocked_either(founder.id, interest.investor_id)
        enforce(
            self.engine.gate.can_act(
                founder, Actions.RESPOND_TO_INTEREST, interest, blocked=blocked
            ),
            Actions.RESPOND_TO_INTEREST,
            self.engine.settings,
        )

        changed = interest.respond(command.accept, now)
        await uow.interests.save(interest)
        if not command.accept:
            return to_interest_dto(interest)

        await RevealLedger(uow.reveals).reveal(interest.investor_id, founder.id, now)

        conversation = await uow.conversations.get_between(founder.id, interest.investor_id)
        if conversation is None:
            conversation = await uow.conversations.add(
                Conversation.start(
                    founder.id, interest.investor_id, ConversationStatus.ACTIVE, True, now
                )
            )
            from_status = "NONE"
        else:
            from_status = apply_event(
                conversation, ConversationEvent.ACTIVATE_VIA_INTEREST
            ).previous.value
            await uow.conversations.save(conversation)

        to_status = conversation.status.value
        if from_status != to_status:

            async def record() -> None:
                increment_conversation_transition(from_status, to_status)

            uow.on_commit(record)

        if changed:
            await self.notifier.notify(
                uow,
                interest.investor_id,
                NotificationType.INTEREST_ACCEPTED,
                "Interest Accepted!",
                "The founder has accepted your interest. You can now message them.",
                now,
                data={
                    "interestId": interest.id.value,
                    "founderId": founder.id.value,
                    "conversationId": conversation.id.value,
                },
            )
        logger.info("[Interest] %s accepted by %s", interest.id, founder.id)
        return to_interest_dto(interest, conversation_id=conversation.id.value)
