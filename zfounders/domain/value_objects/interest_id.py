"""
InterestId Value Object - UUID wrapper.
"""

from __future__ import annotations
from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class InterestId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("InterestId cannot be empty")

        UUID(self.value)  # Validate UUID format

    @classmethod
    def new(cls) -> InterestId:
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
