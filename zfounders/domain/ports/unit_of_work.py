"""
Unit of Work Port - One transactional scope per inbound action.

Usage:
    async with uow:
        conversation = await uow.conversations.get_by_id(cid)
        ...
        uow.on_commit(lambda: realtime.publish(user_id, event))

Leaving the block normally commits; an exception rolls every repository
write back. Callbacks registered with ``on_commit`` run only after a
successful commit, so nothing is pushed for a rolled-back action.
"""

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

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

logger = logging.getLogger(__name__)

AfterCommit = Callable[[], Awaitable[None]]


class UnitOfWork(ABC):
    users: UserRepository
    videos: VideoRepository
    conversations: ConversationRepository
    messages: MessageRepository
    message_limits: MessageLimitRepository
    interests: InterestRepository
    reveals: RevealRepository
    social: SocialGraphRepository
    notifications: NotificationRepository

    def __init__(self):
        self._after_commit: list[AfterCommit] = []

    async def __aenter__(self):
        self._after_commit = []
        await self._begin()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            await self._rollback()
            self._after_commit = []
            return False
        try:
            await self._commit()
        except Exception:
            await self._rollback()
            self._after_commit = []
            raise
        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            try:
                await callback()
            except Exception:
                # Delivery is best effort once the state change is durable.
                logger.exception("[UoW] after-commit callback failed")
        return False

    def on_commit(self, callback: AfterCommit) -> None:
        self._after_commit.append(callback)

    @abstractmethod
    async def _begin(self) -> None: ...

    @abstractmethod
    async def _commit(self) -> None: ...

    @abstractmethod
    async def _rollback(self) -> None: ...
