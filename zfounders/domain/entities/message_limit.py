"""
MessageLimit Entity - Per-user, per-period counter for investor-directed messages.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

from zfounders.domain.value_objects.user_id import UserId

MONTHLY_PERIOD = "monthly"


@dataclass
class MessageLimit:
    user_id: UserId
    period: str
    count: int
    resets_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.resets_at <= now

    def roll_over(self, next_reset: datetime) -> None:
        self.count = 0
        self.resets_at = next_reset

    def try_increment(self, cap: int) -> bool:
        if self.count >= cap:
            return False
        self.count += 1
        return True
