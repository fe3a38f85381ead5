"""In-memory persistence adapter (tests and single-process local runs)."""

from zfounders.infrastructure.persistence.memory.store import MemoryStore
from zfounders.infrastructure.persistence.memory.unit_of_work import MemoryUnitOfWork

__all__ = ["MemoryStore", "MemoryUnitOfWork"]
