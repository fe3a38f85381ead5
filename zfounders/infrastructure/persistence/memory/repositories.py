"""
In-memory repository implementations.

Reads hand out copies and writes store copies, so an entity mutated by a
handler only changes the store through an explicit save, as with Prisma.
Every write first tells the unit's Journal what it is about to change.
"""

from copy import deepcopy
from datetime import datetime
from typing import Iterable, Optional

from zfounders.domain.entities import (
    AccountTypeChange,
    Block,
    Comment,
    Conversation,
    ExpressInterest,
    Follow,
    Like,
    Message,
    MessageLimit,
    Notification,
    ProfileReveal,
    User,
    Video,
    VideoView,
    pair_key,
)
from zfounders.domain.exceptions import ConcurrencyConflictError
from zfounders.domain.ports.repositories import (
    ConversationRepository,
    InterestRepository,
    MessageLimitRepository,
    MessageRepository,
    NotificationRepository,
    RevealRepository,
    SocialGraphRepository,
    UserRepository,
    VideoRepository,
)
from zfounders.domain.value_objects import (
    ConversationId,
    ConversationStatus,
    InterestId,
    InterestStatus,
    UserId,
    VideoId,
    VideoType,
    VisibilityClass,
)
from zfounders.infrastructure.persistence.memory.store import Journal, MemoryStore


class _MemoryRepository:
    def __init__(self, store: MemoryStore, journal: Optional[Journal] = None):
        self._store = store
        self._journal = journal if journal is not None else Journal(store)


class MemoryUserRepository(_MemoryRepository, UserRepository):
    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        return deepcopy(self._store.users.get(user_id.value))

    async def get_many(self, user_ids: list[UserId]) -> dict[str, User]:
        wanted = {u.value for u in user_ids}
        return {
            key: deepcopy(user) for key, user in self._store.users.items() if key in wanted
        }

    async def save(self, user: User) -> None:
        self._journal.entry("users", user.id.value)
        self._store.users[user.id.value] = deepcopy(user)

    async def add_type_change(self, change: AccountTypeChange) -> None:
        self._journal.append("type_changes")
        self._store.type_changes.append(change)

    async def last_type_change(self, user_id: UserId) -> Optional[AccountTypeChange]:
        changes = [c for c in self._store.type_changes if c.user_id == user_id]
        return max(changes, key=lambda c: c.changed_at) if changes else None


class MemoryVideoRepository(_MemoryRepository, VideoRepository):
    async def get_by_id(self, video_id: VideoId) -> Optional[Video]:
        return deepcopy(self._store.videos.get(video_id.value))

    async def save(self, video: Video) -> None:
        self._journal.entry("videos", video.id.value)
        self._store.videos[video.id.value] = deepcopy(video)

    async def list_feed(
        self,
        visibility: Iterable[VisibilityClass],
        owner_id: Optional[UserId],
        limit: int,
        offset: int,
    ) -> list[Video]:
        allowed = set(visibility)
        rows = [
            v
            for v in self._store.videos.values()
            if v.visibility in allowed or (owner_id is not None and v.user_id == owner_id)
        ]
        rows.sort(key=lambda v: v.created_at, reverse=True)
        return deepcopy(rows[offset : offset + limit])

    async def count_created_since(self, user_id: UserId, since: datetime) -> int:
        return sum(
            1
            for v in self._store.videos.values()
            if v.user_id == user_id and v.created_at >= since
        )

    async def get_pinned_pitch(self, user_id: UserId) -> Optional[Video]:
        for video in self._store.videos.values():
            if video.user_id == user_id and video.is_pinned and video.type == VideoType.PITCH:
                return deepcopy(video)
        return None

    async def add_like(self, like: Like) -> bool:
        if like.key in self._store.likes:
            return False
        self._journal.entry("likes", like.key)
        self._store.likes[like.key] = like
        return True

    async def add_comment(self, comment: Comment) -> None:
        self._journal.append("comments")
        self._store.comments.append(deepcopy(comment))

    async def list_comments(self, video_id: VideoId) -> list[Comment]:
        return [deepcopy(c) for c in self._store.comments if c.video_id == video_id]

    async def record_view(self, view: VideoView) -> None:
        self._journal.append("views")
        self._store.views.append(view)

    async def list_views(self, video_id: VideoId) -> list[VideoView]:
        return [v for v in self._store.views if v.video_id == video_id]


class MemoryConversationRepository(_MemoryRepository, ConversationRepository):
    async def get_by_id(self, conversation_id: ConversationId) -> Optional[Conversation]:
        return deepcopy(self._store.conversations.get(conversation_id.value))

    async def get_between(self, a: UserId, b: UserId) -> Optional[Conversation]:
        key = pair_key(a, b)
        for conversation in self._store.conversations.values():
            if conversation.key == key:
                return deepcopy(conversation)
        return None

    async def add(self, conversation: Conversation) -> Conversation:
        if any(c.key == conversation.key for c in self._store.conversations.values()):
            raise ConcurrencyConflictError("Conversation already exists for this pair")
        self._journal.entry("conversations", conversation.id.value)
        self._store.conversations[conversation.id.value] = deepcopy(conversation)
        return conversation

    async def save(self, conversation: Conversation) -> None:
        self._journal.entry("conversations", conversation.id.value)
        self._store.conversations[conversation.id.value] = deepcopy(conversation)

    async def delete(self, conversation_id: ConversationId) -> bool:
        self._journal.entry("conversations", conversation_id.value)
        return self._store.conversations.pop(conversation_id.value, None) is not None

    async def list_for_user(
        self, user_id: UserId, status: Optional[ConversationStatus] = None
    ) -> list[Conversation]:
        return [
            deepcopy(c)
            for c in self._store.conversations.values()
            if c.has_participant(user_id) and (status is None or c.status == status)
        ]


class MemoryMessageRepository(_MemoryRepository, MessageRepository):
    def _in(self, conversation_id: ConversationId) -> list[Message]:
        rows = [m for m in self._store.messages.values() if m.conversation_id == conversation_id]
        rows.sort(key=lambda m: m.created_at)
        return rows

    async def add(self, message: Message) -> None:
        self._journal.entry("messages", message.id.value)
        self._store.messages[message.id.value] = deepcopy(message)

    async def list_newest_first(
        self, conversation_id: ConversationId, limit: int, offset: int = 0
    ) -> list[Message]:
        rows = list(reversed(self._in(conversation_id)))
        return deepcopy(rows[offset : offset + limit])

    async def latest(self, conversation_id: ConversationId) -> Optional[Message]:
        rows = self._in(conversation_id)
        return deepcopy(rows[-1]) if rows else None

    async def count_unread(self, conversation_id: ConversationId, reader_id: UserId) -> int:
        return sum(
            1
            for m in self._in(conversation_id)
            if m.sender_id != reader_id and m.read_at is None
        )

    async def mark_read(
        self, conversation_id: ConversationId, reader_id: UserId, now: datetime
    ) -> int:
        marked = 0
        for message in self._in(conversation_id):
            if message.sender_id != reader_id and message.read_at is None:
                self._journal.entry("messages", message.id.value)
                message.read_at = now
                marked += 1
        return marked

    async def delete_for_conversation(self, conversation_id: ConversationId) -> int:
        doomed = [m.id.value for m in self._in(conversation_id)]
        for key in doomed:
            self._journal.entry("messages", key)
            del self._store.messages[key]
        return len(doomed)


class MemoryMessageLimitRepository(_MemoryRepository, MessageLimitRepository):
    async def get(self, user_id: UserId, period: str) -> Optional[MessageLimit]:
        return deepcopy(self._store.message_limits.get((user_id.value, period)))

    async def try_reserve(
        self,
        user_id: UserId,
        period: str,
        cap: int,
        now: datetime,
        next_reset: datetime,
    ) -> tuple[bool, MessageLimit]:
        key = (user_id.value, period)
        self._journal.entry("message_limits", key)
        limit = self._store.message_limits.get(key)
        if limit is None:
            limit = MessageLimit(user_id, period, 0, next_reset)
            self._store.message_limits[key] = limit
        elif limit.is_expired(now):
            limit.roll_over(next_reset)
        reserved = limit.try_increment(cap)
        return reserved, deepcopy(limit)


class MemoryInterestRepository(_MemoryRepository, InterestRepository):
    async def get_by_id(self, interest_id: InterestId) -> Optional[ExpressInterest]:
        return deepcopy(self._store.interests.get(interest_id.value))

    async def upsert(self, interest: ExpressInterest) -> ExpressInterest:
        for existing in self._store.interests.values():
            if existing.key == interest.key:
                self._journal.entry("interests", existing.id.value)
                existing.status = InterestStatus.PENDING
                existing.message = interest.message
                existing.updated_at = interest.created_at
                return deepcopy(existing)
        self._journal.entry("interests", interest.id.value)
        self._store.interests[interest.id.value] = deepcopy(interest)
        return interest

    async def save(self, interest: ExpressInterest) -> None:
        self._journal.entry("interests", interest.id.value)
        self._store.interests[interest.id.value] = deepcopy(interest)

    async def has_accepted(self, investor_id: UserId, founder_id: UserId) -> bool:
        return any(
            i.investor_id == investor_id and i.founder_id == founder_id and i.is_accepted
            for i in self._store.interests.values()
        )

    async def list_received(
        self, founder_id: UserId, status: Optional[InterestStatus] = None
    ) -> list[ExpressInterest]:
        rows = [
            i
            for i in self._store.interests.values()
            if i.founder_id == founder_id and (status is None or i.status == status)
        ]
        rows.sort(key=lambda i: i.created_at, reverse=True)
        return deepcopy(rows)

    async def list_sent(self, investor_id: UserId) -> list[ExpressInterest]:
        rows = [i for i in self._store.interests.values() if i.investor_id == investor_id]
        rows.sort(key=lambda i: i.created_at, reverse=True)
        return deepcopy(rows)


class MemoryRevealRepository(_MemoryRepository, RevealRepository):
    async def add(self, investor_id: UserId, founder_id: UserId, now: datetime) -> bool:
        reveal = ProfileReveal(investor_id, founder_id, now)
        if reveal.key in self._store.reveals:
            return False
        self._journal.entry("reveals", reveal.key)
        self._store.reveals[reveal.key] = reveal
        return True

    async def exists(self, investor_id: UserId, founder_id: UserId) -> bool:
        return (investor_id.value, founder_id.value) in self._store.reveals

    async def revealed_to(self, founder_id: UserId) -> set[str]:
        return {inv for inv, founder in self._store.reveals if founder == founder_id.value}


class MemorySocialGraphRepository(_MemoryRepository, SocialGraphRepository):
    async def add_follow(self, follow: Follow) -> bool:
        if follow.key in self._store.follows:
            return False
        self._journal.entry("follows", follow.key)
        self._store.follows[follow.key] = follow
        return True

    async def remove_follow(self, follower_id: UserId, following_id: UserId) -> bool:
        self._journal.entry("follows", (follower_id.value, following_id.value))
        return self._store.follows.pop((follower_id.value, following_id.value), None) is not None

    async def is_following(self, follower_id: UserId, following_id: UserId) -> bool:
        return (follower_id.value, following_id.value) in self._store.follows

    async def remove_follows_between(self, a: UserId, b: UserId) -> int:
        removed = 0
        for key in ((a.value, b.value), (b.value, a.value)):
            self._journal.entry("follows", key)
            if self._store.follows.pop(key, None) is not None:
                removed += 1
        return removed

    async def add_block(self, block: Block) -> bool:
        if block.key in self._store.blocks:
            return False
        self._journal.entry("blocks", block.key)
        self._store.blocks[block.key] = block
        return True

    async def remove_block(self, blocker_id: UserId, blocked_id: UserId) -> bool:
        self._journal.entry("blocks", (blocker_id.value, blocked_id.value))
        return self._store.blocks.pop((blocker_id.value, blocked_id.value), None) is not None

    async def is_blocked_either(self, a: UserId, b: UserId) -> bool:
        return (a.value, b.value) in self._store.blocks or (
            b.value,
            a.value,
        ) in self._store.blocks

    async def list_blocked(self, blocker_id: UserId) -> list[Block]:
        rows = [b for b in self._store.blocks.values() if b.blocker_id == blocker_id]
        rows.sort(key=lambda b: b.created_at, reverse=True)
        return rows


class MemoryNotificationRepository(_MemoryRepository, NotificationRepository):
    async def add(self, notification: Notification) -> None:
        self._journal.append("notifications")
        self._store.notifications.append(deepcopy(notification))

    async def list_for_user(
        self, user_id: UserId, limit: int = 50, unread_only: bool = False
    ) -> list[Notification]:
        rows = [
            n
            for n in self._store.notifications
            if n.user_id == user_id and not (unread_only and n.read_at is not None)
        ]
        rows.sort(key=lambda n: n.created_at, reverse=True)
        return deepcopy(rows[:limit])

    async def count_unread(self, user_id: UserId) -> int:
        return sum(
            1
            for n in self._store.notifications
            if n.user_id == user_id and n.read_at is None
        )

    async def mark_read(self, user_id: UserId, notification_id: str, now: datetime) -> bool:
        for index, notification in enumerate(self._store.notifications):
            if notification.id == notification_id and notification.user_id == user_id:
                if notification.read_at is None:
                    self._journal.item("notifications", index)
                    notification.read_at = now
                return True
        return False

    async def mark_all_read(self, user_id: UserId, now: datetime) -> int:
        marked = 0
        for index, notification in enumerate(self._store.notifications):
            if notification.user_id == user_id and notification.read_at is None:
                self._journal.item("notifications", index)
                notification.read_at = now
                marked += 1
        return marked
