"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import threading

from backend.cache import connect_cache
from backend.config import get_settings
from backend.service import FortuneService
from backend.store import FortuneStore

_fortune_service: FortuneService | None = None
_lock = threading.Lock()


def build_fortune_service() -> FortuneService:
    """
    Connect the cache, seed the store and overlay whatever the cache holds.
    """
    settings = get_settings()
    cache = connect_cache(settings)
    service = FortuneService(FortuneStore.with_defaults(), cache)
    service.load_from_cache()
    return service


def get_fortune_service() -> FortuneService:
    """
    Return a singleton service so the store persists across requests.
    """
    global _fortune_service
    if _fortune_service:
        return _fortune_service

    with _lock:
        if _fortune_service is None:
            _fortune_service = build_fortune_service()
    return _fortune_service


def reset_fortune_service() -> None:
    """Drop the singleton (useful in tests)."""
    global _fortune_service
    with _lock:
        _fortune_service = None
