"""
Update Privacy Settings Command.

``allow_messages_from_everyone`` feeds the privacy rule of the messaging
gate. ``is_public_mode`` only exists for investors and decides whether their
identity is visible without a reveal. Turning public mode off later does not
undo reveals already recorded.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, load_actor
from zfounders.application.dto.user import PrivacySettingsDTO, to_privacy_settings
from zfounders.domain.exceptions import DomainValidationError
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdatePrivacySettingsCommand(Command[PrivacySettingsDTO]):
    user_id: UserId
    allow_messages_from_everyone: Optional[bool] = None
    is_public_mode: Optional[bool] = None


class UpdatePrivacySettingsHandler(CommandHandler[PrivacySettingsDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: UpdatePrivacySettingsCommand) -> PrivacySettingsDTO:
        async with self.uow as uow:
            user = await load_actor(uow, command.user_id)

            if command.is_public_mode is not None:
                if not user.is_investor:
                    raise DomainValidationError("Only investors have a public mode")
                user.ensure_investor_records()
                user.investor_profile.is_public_mode = command.is_public_mode
            if command.allow_messages_from_everyone is not None:
                user.allow_messages_from_everyone = command.allow_messages_from_everyone

            await uow.users.save(user)
            logger.info(
                "[Account] %s privacy: public_mode=%s allow_everyone=%s",
                user.id,
                command.is_public_mode,
                command.allow_messages_from_everyone,
            )
            return to_privacy_settings(user)
