"""
Investor-intent records: ExpressInterest and ProfileReveal.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from zfounders.domain.value_objects.enums import InterestStatus
from zfounders.domain.value_objects.interest_id import InterestId
from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass
class ExpressInterest:
    id: InterestId
    investor_id: UserId
    founder_id: UserId
    video_id: VideoId
    status: InterestStatus
    created_at: datetime
    message: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        investor_id: UserId,
        founder_id: UserId,
        video_id: VideoId,
        now: datetime,
        message: Optional[str] = None,
    ) -> ExpressInterest:
        return cls(
            id=InterestId.new(),
            investor_id=investor_id,
            founder_id=founder_id,
            video_id=video_id,
            status=InterestStatus.PENDING,
            created_at=now,
            message=message,
            updated_at=now,
        )

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.investor_id.value, self.founder_id.value, self.video_id.value)

    @property
    def is_accepted(self) -> bool:
        return self.status == InterestStatus.ACCEPTED

    def respond(self, accept: bool, now: datetime) -> bool:
        """Set the founder's answer. Returns True when the status changed."""
        new_status = InterestStatus.ACCEPTED if accept else InterestStatus.DECLINED
        changed = new_status != self.status
        self.status = new_status
        self.updated_at = now
        return changed


@dataclass(frozen=True)
class ProfileReveal:
    """Directed fact: the investor's identity is visible to this founder."""

    investor_id: UserId
    founder_id: UserId
    revealed_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.investor_id.value, self.founder_id.value)
