"""Prisma Social Graph Repository Implementation (follows and blocks)."""

from prisma import Prisma

from zfounders.domain.entities.social import Block, Follow
from zfounders.domain.ports.repositories import SocialGraphRepository
from zfounders.domain.value_objects import UserId


class PrismaSocialGraphRepository(SocialGraphRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def add_follow(self, follow: Follow) -> bool:
        created = await self._prisma.follow.create_many(
            data=[{
                "follower_id": follow.follower_id.value,
                "following_id": follow.following_id.value,
                "created_at": follow.created_at,
            }],
            skip_duplicates=True,
        )
        return created > 0

    async def remove_follow(self, follower_id: UserId, following_id: UserId) -> bool:
        removed = await self._prisma.follow.delete_many(
            where={"follower_id": follower_id.value, "following_id": following_id.value}
        )
        return removed > 0

    async def is_following(self, follower_id: UserId, following_id: UserId) -> bool:
        count = await self._prisma.follow.count(
            where={"follower_id": follower_id.value, "following_id": following_id.value}
        )
        return count > 0

    async def remove_follows_between(self, a: UserId, b: UserId) -> int:
        return await self._prisma.follow.delete_many(
            where={"OR": [
                {"follower_id": a.value, "following_id": b.value},
                {"follower_id": b.value, "following_id": a.value},
            ]}
        )

    async def add_block(self, block: Block) -> bool:
        created = await self._prisma.block.create_many(
            data=[{
                "blocker_id": block.blocker_id.value,
                "blocked_id": block.blocked_id.value,
                "created_at": block.created_at,
            }],
            skip_duplicates=True,
        )
        return created > 0

    async def remove_block(self, blocker_id: UserId, blocked_id: UserId) -> bool:
        removed = await self._prisma.block.delete_many(
            where={"blocker_id": blocker_id.value, "blocked_id": blocked_id.value}
        )
        return removed > 0

    async def is_blocked_either(self, a: UserId, b: UserId) -> bool:
        count = await self._prisma.block.count(
            where={"OR": [
                {"blocker_id": a.value, "blocked_id": b.value},
                {"blocker_id": b.value, "blocked_id": a.value},
            ]}
        )
        return count > 0

    async def list_blocked(self, blocker_id: UserId) -> list[Block]:
        records = await self._prisma.block.find_many(
            where={"blocker_id": blocker_id.value}, order={"created_at": "desc"}
        )
        return [
            Block(
                blocker_id=UserId(r.blocker_id),
                blocked_id=UserId(r.blocked_id),
                created_at=r.created_at,
            )
            for r in records
        ]
