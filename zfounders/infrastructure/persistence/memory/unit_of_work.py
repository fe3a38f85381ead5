"""In-memory UnitOfWork: store-wide lock plus a per-unit undo journal."""

from zfounders.domain.ports.unit_of_work import UnitOfWork
from zfounders.infrastructure.persistence.memory.repositories import (
    MemoryConversationRepository,
    MemoryInterestRepository,
    MemoryMessageLimitRepository,
    MemoryMessageRepository,
    MemoryNotificationRepository,
    MemoryRevealRepository,
    MemorySocialGraphRepository,
    MemoryUserRepository,
    MemoryVideoRepository,
)
from zfounders.infrastructure.persistence.memory.store import Journal, MemoryStore


class MemoryUnitOfWork(UnitOfWork):
    def __init__(self, store: MemoryStore):
        super().__init__()
        self.store = store
        self.journal = Journal(store)
        self._held = False
        self.users = MemoryUserRepository(store, self.journal)
        self.videos = MemoryVideoRepository(store, self.journal)
        self.conversations = MemoryConversationRepository(store, self.journal)
        self.messages = MemoryMessageRepository(store, self.journal)
        self.message_limits = MemoryMessageLimitRepository(store, self.journal)
        self.interests = MemoryInterestRepository(store, self.journal)
        self.reveals = MemoryRevealRepository(store, self.journal)
        self.social = MemorySocialGraphRepository(store, self.journal)
        self.notifications = MemoryNotificationRepository(store, self.journal)

    async def _begin(self) -> None:
        await self.store.lock.acquire()
        self._held = True
        self.journal.begin()

    async def _commit(self) -> None:
        self.journal.discard()
        self._release()

    async def _rollback(self) -> None:
        if self.journal.active:
            self.journal.rollback()
        self._release()

    def _release(self) -> None:
        if self._held:
            self._held = False
            self.store.lock.release()
