"""
Decision-table inputs for the policy core.

Built once from ``zfounders.config.settings.Config`` and injected; nothing in
``zfounders.domain`` reads the environment.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from zfounders.domain.entities.user import User
from zfounders.domain.value_objects.enums import AccountType, SubscriptionTier

DEFAULT_PREMIUM_TIERS = frozenset(
    {
        SubscriptionTier.FOUNDER_PRO,
        SubscriptionTier.INVESTOR_PRO,
        SubscriptionTier.STEALTH_MODE,
    }
)


@dataclass(frozen=True)
class PolicySettings:
    free_daily_post_limit: int = 3
    premium_daily_post_limit: int = 10
    founder_investor_dm_limit: int = 3
    builder_investor_dm_limit: int = 5
    premium_tiers: frozenset = field(default=DEFAULT_PREMIUM_TIERS)
    max_video_duration_seconds: int = 90
    account_type_switch_cooldown_days: int = 30
    upgrade_url: str = "/api/subscriptions/plans"

    def is_premium(self, user: User, now: datetime) -> bool:
        subscription = user.subscription
        if subscription is None or subscription.tier not in self.premium_tiers:
            return False
        return subscription.is_active(now)

    def monthly_investor_dm_cap(self, account_type: AccountType) -> Optional[int]:
        if account_type == AccountType.FOUNDER:
            return self.founder_investor_dm_limit
        if account_type == AccountType.BUILDER:
            return self.builder_investor_dm_limit
        return None

    def daily_post_cap(self, premium: bool) -> int:
        return self.premium_daily_post_limit if premium else self.free_daily_post_limit
