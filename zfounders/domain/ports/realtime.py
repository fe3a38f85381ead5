"""
Realtime Port - Push an event to every live connection of one user.
"""

from abc import ABC, abstractmethod
from typing import Any


class RealtimePublisher(ABC):
    @abstractmethod
    async def publish(self, user_id: str, event: dict[str, Any]) -> None: ...
