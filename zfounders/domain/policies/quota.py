"""
Quota Ledger - monthly cap on founder/builder messages to investors.

``evaluate`` runs the pure part of the policy (steps 1-4). Only a metered
outcome touches storage, and then through a single conditional
reserve-or-reject on the counter row. The reservation shares the caller's
unit of work, so if the message is never persisted the increment rolls back
with it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from zfounders.domain.entities.message_limit import MONTHLY_PERIOD
from zfounders.domain.entities.user import User
from zfounders.domain.policies.decision import Decision
from zfounders.domain.policies.periods import first_of_next_month
from zfounders.domain.policies.settings import PolicySettings
from zfounders.domain.ports.repositories import MessageLimitRepository
from zfounders.domain.value_objects.enums import AccountType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaCheck:
    decision: Decision
    cap: Optional[int] = None

    @property
    def metered(self) -> bool:
        return self.decision.allowed and self.cap is not None


class QuotaLedger:
    def __init__(self, settings: PolicySettings):
        self.settings = settings

    def evaluate(
        self, actor: User, target_account_type: AccountType, now: datetime
    ) -> QuotaCheck:
        if actor.account_type == AccountType.LURKER:
            return QuotaCheck(
                Decision.deny(
                    "account_type",
                    "Lurkers cannot send messages. Please upgrade your account.",
                    hint="upgrade",
                )
            )

        if actor.account_type == AccountType.INVESTOR:
            if not actor.is_approved_investor:
                return QuotaCheck(
                    Decision.deny(
                        "verification_required",
                        "You must be a verified investor to send messages.",
                        hint="verify",
                    )
                )
            return QuotaCheck(Decision.allow("investor_unlimited"))

        if target_account_type != AccountType.INVESTOR:
            return QuotaCheck(Decision.allow("unmetered_target"))

        if self.settings.is_premium(actor, now):
            return QuotaCheck(Decision.allow("premium"))

        cap = self.settings.monthly_investor_dm_cap(actor.account_type)
        if cap is None:
            return QuotaCheck(Decision.allow("unmetered_account"))
        return QuotaCheck(Decision.allow("metered"), cap=cap)

    async def check_and_reserve(
        self,
        limits: MessageLimitRepository,
        actor: User,
        target_account_type: AccountType,
        now: datetime,
    ) -> Decision:
        check = self.evaluate(actor, target_account_type, now)
        if not check.metered:
            return check.decision

        reserved, limit = await limits.try_reserve(
            actor.id, MONTHLY_PERIOD, check.cap, now, first_of_next_month(now)
        )
        if not reserved:
            logger.info(
                "[Quota] user %s at monthly cap %s until %s",
                actor.id,
                check.cap,
                limit.resets_at.isoformat(),
            )
            return Decision.quota(
                "monthly_limit",
                f"Monthly limit of {check.cap} investor messages reached",
                resets_at=limit.resets_at,
                hint="upgrade",
            )

        logger.debug("[Quota] user %s reserved %s/%s", actor.id, limit.count, check.cap)
        return Decision.allow("reserved")
