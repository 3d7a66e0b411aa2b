"""
HTTP routes for the fortune backend.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.dependencies import get_fortune_service
from backend.schemas import FortunePayload, FortuneResponse
from backend.service import FortuneService

FORTUNE_NOT_FOUND = "fortune not found"

router = APIRouter()


@router.get("/fortunes", response_model=list[FortuneResponse])
def list_fortunes(service: FortuneService = Depends(get_fortune_service)):
    return [FortuneResponse.from_fortune(f) for f in service.list_fortunes()]


# Declared before /fortunes/{fortune_id} so "random" is never taken as an id.
@router.get("/fortunes/random", response_model=FortuneResponse)
def random_fortune(service: FortuneService = Depends(get_fortune_service)):
    fortune = service.random_fortune()
    if fortune is None:
        raise HTTPException(status_code=404, detail=FORTUNE_NOT_FOUND)
    return FortuneResponse.from_fortune(fortune)


@router.get("/fortunes/{fortune_id}", response_model=FortuneResponse)
def get_fortune(
    fortune_id: str, service: FortuneService = Depends(get_fortune_service)
):
    fortune = service.get_fortune(fortune_id)
    if fortune is None:
        raise HTTPException(status_code=404, detail=FORTUNE_NOT_FOUND)
    return FortuneResponse.from_fortune(fortune)


@router.post("/fortunes", response_model=FortuneResponse)
def create_fortune(
    payload: FortunePayload,
    service: FortuneService = Depends(get_fortune_service),
):
    """
    Store a fortune, writing it through to the cache when one is connected.
    """
    fortune = service.create_fortune(payload.to_fortune())
    return FortuneResponse.from_fortune(fortune)
