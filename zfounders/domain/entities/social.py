"""
Social graph and engagement edges, each a directed fact keyed by its ordered pair.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

from zfounders.domain.value_objects.user_id import UserId
from zfounders.domain.value_objects.video_id import VideoId


@dataclass(frozen=True)
class Follow:
    follower_id: UserId
    following_id: UserId
    created_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.follower_id.value, self.following_id.value)


@dataclass(frozen=True)
class Block:
    blocker_id: UserId
    blocked_id: UserId
    created_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.blocker_id.value, self.blocked_id.value)


@dataclass(frozen=True)
class Like:
    video_id: VideoId
    user_id: UserId
    created_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.video_id.value, self.user_id.value)
