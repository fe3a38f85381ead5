"""
Base interfaces for CQRS pattern.

Usage:
    @dataclass(frozen=True)
    class FollowUserCommand(Command[bool]):
        actor_id: UserId
        target_id: UserId

    class FollowUserHandler(CommandHandler[bool]):
        def __init__(self, uow: UnitOfWork, engine: PolicyEngine):
            self.uow = uow
            self.engine = engine

        async def execute(self, cmd: FollowUserCommand) -> bool:
            async with self.uow:
                ...
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")
class Command(ABC, Generic[T]):
    """Base class for write operations"""
    pass

class CommandHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, command: Command[T]) -> T:
        """Execute the command and return a result of type T"""
        ...

class Query(ABC, Generic[T]):
    """Base class for read operations"""
    pass

class QueryHandler(ABC, Generic[T]):
    @abstractmethod
    async def execute(self, query: Query[T]) -> T:
        """Execute the query and return a result of type T"""
        ...
