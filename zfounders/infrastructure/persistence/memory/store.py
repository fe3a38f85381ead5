"""
In-memory store shared by every MemoryUnitOfWork of one process.

One asyncio lock serializes units of work. Instead of copying the whole store
on entry, each unit keeps a Journal: the repositories record the prior state
of every entry right before they change it, and rollback replays those
records in reverse. A read-only unit records nothing.
"""

import asyncio
import copy
from dataclasses import dataclass, field
from typing import Callable

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
)

_MISSING = object()


@dataclass
class MemoryStore:
    users: dict[str, User] = field(default_factory=dict)
    type_changes: list[AccountTypeChange] = field(default_factory=list)
    videos: dict[str, Video] = field(default_factory=dict)
    likes: dict[tuple, Like] = field(default_factory=dict)
    comments: list[Comment] = field(default_factory=list)
    views: list[VideoView] = field(default_factory=list)
    conversations: dict[str, Conversation] = field(default_factory=dict)
    messages: dict[str, Message] = field(default_factory=dict)
    message_limits: dict[tuple, MessageLimit] = field(default_factory=dict)
    interests: dict[str, ExpressInterest] = field(default_factory=dict)
    reveals: dict[tuple, ProfileReveal] = field(default_factory=dict)
    follows: dict[tuple, Follow] = field(default_factory=dict)
    blocks: dict[tuple, Block] = field(default_factory=dict)
    notifications: list[Notification] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)


class Journal:
    """Undo log of one unit of work. Inactive outside a unit, where it records nothing."""

    def __init__(self, store: MemoryStore):
        self._store = store
        self._undo: list[Callable[[], None]] = []
        self._seen: set = set()
        self.active = False

    def begin(self) -> None:
        self._undo, self._seen = [], set()
        self.active = True

    def discard(self) -> None:
        self._undo, self._seen = [], set()
        self.active = False

    def rollback(self) -> None:
        for undo in reversed(self._undo):
            undo()
        self.discard()

    @property
    def size(self) -> int:
        return len(self._undo)

    def entry(self, table: str, key) -> None:
        """Before inserting, replacing, mutating or deleting ``table[key]``."""
        if not self._first(table, "entry", key):
            return
        rows = getattr(self._store, table)
        previous = rows.get(key, _MISSING)
        if previous is not _MISSING:
            previous = copy.deepcopy(previous)

        def undo() -> None:
            if previous is _MISSING:
                rows.pop(key, None)
            else:
                rows[key] = previous

        self._undo.append(undo)

    def append(self, table: str) -> None:
        """Before appending to an append-only list."""
        if not self._first(table, "append"):
            return
        rows = getattr(self._store, table)
        length = len(rows)

        def undo() -> None:
            del rows[length:]

        self._undo.append(undo)

    def item(self, table: str, index: int) -> None:
        """Before mutating ``table[index]`` of a list in place."""
        if not self._first(table, "item", index):
            return
        rows = getattr(self._store, table)
        previous = copy.deepcopy(rows[index])

        def undo() -> None:
            rows[index] = previous

        self._undo.append(undo)

    def _first(self, *mark) -> bool:
        if not self.active or mark in self._seen:
            return False
        self._seen.add(mark)
        return True
