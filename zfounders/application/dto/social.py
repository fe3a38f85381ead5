"""Social graph DTOs."""

from pydantic import BaseModel
from datetime import datetime


class BlockDTO(BaseModel):
    blocked_id: str
    created_at: datetime


class BlockListDTO(BaseModel):
    blocked: list[BlockDTO]
