"""
Switch Account Type Command.

FOUNDER and BUILDER can swap with each other, a LURKER can become anything,
and an INVESTOR is final. One switch per cooldown window. Becoming an
investor creates the investor profile and a PENDING verification.
"""

import logging
from dataclasses import dataclass

from zfounders.application.common.interfaces import Command, CommandHandler
from zfounders.application.common.policy import PolicyEngine, enforce, load_actor
from zfounders.application.dto.user import ProfileDTO, to_profile
from zfounders.domain.entities.user import AccountTypeChange
from zfounders.domain.policies.permissions import Actions
from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.domain.value_objects.enums import AccountType
from zfounders.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwitchAccountTypeCommand(Command[ProfileDTO]):
    user_id: UserId
    new_type: AccountType


class SwitchAccountTypeHandler(CommandHandler[ProfileDTO]):
    def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
        self.uow = uow
        self.engine = engine

    async def execute(self, command: SwitchAccountTypeCommand) -> ProfileDTO:
        async with self.uow as uow:
            now = self.engine.clock.now()
            user = await load_actor(uow, command.user_id)
            last_change = await uow.users.last_type_change(user.id)

            enforce(
                self.engine.gate.can_act(
                    user,
                    Actions.SWITCH_ACCOUNT_TYPE,
                    command.new_type,
                    last_change=last_change,
                    now=now,
                ),
                Actions.SWITCH_ACCOUNT_TYPE,
                self.engine.settings,
            )

            previous = user.switch_account_type(command.new_type)
            await uow.users.save(user)
            await uow.users.add_type_change(
                AccountTypeChange(user.id, previous, command.new_type, now)
            )
            logger.info(
                "[Account] %s switched %s -> %s",
                user.id,
                previous.value,
                command.new_type.value,
            )
            return to_profile(user, visible=True)
