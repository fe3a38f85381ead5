"""
Clock Port - Source of the current time (UTC, timezone-aware).
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...
