"""
HTTP client for the fortune backend.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests
from pydantic import TypeAdapter, ValidationError

from frontend.schemas import Fortune

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5  # seconds

_fortune_list = TypeAdapter(list[Fortune])


class BackendError(Exception):
    """Raised when the backend cannot be reached or returns bad data."""


class BackendClient:
    """
    Thin wrapper over the backend's /fortunes API.

    Args:
        base_url (str): Backend root, e.g. ``http://localhost:9000``.
        timeout (float): Per-request timeout in seconds.
        session (requests.Session, optional): Session to reuse connections.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> object:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
            raise BackendError(f"Request failed: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            logger.error("Failed to parse JSON from %s: %s", url, e)
            raise BackendError(f"Error parsing response: {e}") from e

    def random_fortune(self) -> Fortune:
        payload = self._request("GET", "/fortunes/random")
        try:
            return Fortune.model_validate(payload)
        except ValidationError as e:
            raise BackendError(f"Error parsing response: {e}") from e

    def list_fortunes(self) -> list[Fortune]:
        payload = self._request("GET", "/fortunes")
        try:
            return _fortune_list.validate_python(payload)
        except ValidationError as e:
            raise BackendError(f"Error parsing response: {e}") from e

    def create_fortune(self, fortune: Fortune) -> None:
        self._request("POST", "/fortunes", json=fortune.model_dump())
