"""
Pydantic schemas shared by the frontend routes and backend client.
"""

from __future__ import annotations

from pydantic import BaseModel


class Fortune(BaseModel):
    id: str
    message: str


class NewFortune(BaseModel):
    message: str
