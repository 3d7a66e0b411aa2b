"""
Dependency wiring for the frontend app.
"""

from __future__ import annotations

from frontend.client import BackendClient
from frontend.config import get_settings

_backend_client: BackendClient | None = None


def get_backend_client() -> BackendClient:
    global _backend_client
    if _backend_client:
        return _backend_client

    settings = get_settings()
    _backend_client = BackendClient(
        settings.backend_url, timeout=settings.backend_timeout_seconds
    )
    return _backend_client
