"""
Pydantic schemas for the fortune backend.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from backend.store import Fortune


class FortunePayload(BaseModel):
    id: str = Field(..., min_length=1)
    message: str

    def to_fortune(self) -> Fortune:
        return Fortune(id=self.id, message=self.message)


class FortuneResponse(BaseModel):
    id: str
    message: str

    @classmethod
    def from_fortune(cls, fortune: Fortune) -> "FortuneResponse":
        return cls(id=fortune.id, message=fortune.message)
