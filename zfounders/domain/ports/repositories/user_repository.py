"""
User Repository Port - Interface for user and account-history persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from zfounders.domain.entities.user import AccountTypeChange, User
from zfounders.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_many(self, user_ids: list[UserId]) -> dict[str, User]: ...

    @abstractmethod
    async def save(self, user: User) -> None: ...

    @abstractmethod
    async def add_type_change(self, change: AccountTypeChange) -> None: ...

    @abstractmethod
    async def last_type_change(
        self, user_id: UserId
    ) -> Optional[AccountTypeChange]: ...
