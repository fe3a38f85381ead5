"""
Social Graph Repository Port - Follow and Block edges.
"""

from abc import ABC, abstractmethod

from zfounders.domain.entities.social import Block, Follow
from zfounders.domain.value_objects.user_id import UserId


class SocialGraphRepository(ABC):
    @abstractmethod
    async def add_follow(self, follow: Follow) -> bool: ...

    @abstractmethod
    async def remove_follow(self, follower_id: UserId, following_id: UserId) -> bool: ...

    @abstractmethod
    async def is_following(self, follower_id: UserId, following_id: UserId) -> bool: ...

    @abstractmethod
    async def remove_follows_between(self, a: UserId, b: UserId) -> int: ...

    @abstractmethod
    async def add_block(self, block: Block) -> bool: ...

    @abstractmethod
    async def remove_block(self, blocker_id: UserId, blocked_id: UserId) -> bool: ...

    @abstractmethod
    async def is_blocked_either(self, a: UserId, b: UserId) -> bool: ...

    @abstractmethod
    async def list_blocked(self, blocker_id: UserId) -> list[Block]: ...
