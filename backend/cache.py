"""
Cache abstraction for mirroring fortunes to an external key-value store.

Supports an in-memory fallback for tests/local runs and a Redis-backed
implementation for production. Fortunes live in a single Redis hash
(``fortunes`` by default) with field = id and value = message.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

import redis
from redis import exceptions as redis_exceptions

from backend.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_HASH_KEY = "fortunes"


class CacheError(Exception):
    """Raised when a cache operation cannot be completed."""


class CacheMissError(CacheError):
    """Raised when the cache holds no value for the requested id."""


class FortuneCache(Protocol):
    """Minimal interface the service needs from the external store."""

    def ping(self) -> None:
        ...

    def get(self, fortune_id: str) -> str:
        ...

    def set(self, fortune_id: str, message: str) -> None:
        ...

    def list_all(self) -> dict[str, str]:
        ...


@dataclass
class InMemoryFortuneCache:
    """Dict-backed cache for testing/dev."""

    items: dict[str, str] = field(default_factory=dict)
    available: bool = True

    def _check(self) -> None:
        if not self.available:
            raise CacheError("in-memory cache marked unavailable")

    def ping(self) -> None:
        self._check()

    def get(self, fortune_id: str) -> str:
        self._check()
        try:
            return self.items[fortune_id]
        except KeyError:
            raise CacheMissError(fortune_id) from None

    def set(self, fortune_id: str, message: str) -> None:
        self._check()
        self.items[fortune_id] = message

    def list_all(self) -> dict[str, str]:
        self._check()
        return dict(self.items)


@dataclass
class RedisFortuneCache:
    """Redis-backed cache storing every fortune as a field of one hash."""

    url: str
    hash_key: str = DEFAULT_HASH_KEY
    timeout: float = 2.0

    def __post_init__(self):
        # The client owns a connection pool and is safe to share across threads.
        self.client = redis.Redis.from_url(
            self.url,
            decode_responses=True,
            socket_timeout=self.timeout,
            socket_connect_timeout=self.timeout,
        )

    def ping(self) -> None:
        try:
            self.client.ping()
        except redis_exceptions.RedisError as exc:
            raise CacheError(f"redis ping failed: {exc}") from exc

    def get(self, fortune_id: str) -> str:
        try:
            message = self.client.hget(self.hash_key, fortune_id)
        except redis_exceptions.RedisError as exc:
            raise CacheError(f"redis hget failed: {exc}") from exc
        if message is None:
            raise CacheMissError(fortune_id)
        return message

    def set(self, fortune_id: str, message: str) -> None:
        try:
            self.client.hset(self.hash_key, fortune_id, message)
        except redis_exceptions.RedisError as exc:
            raise CacheError(f"redis hset failed: {exc}") from exc

    def list_all(self) -> dict[str, str]:
        try:
            return dict(self.client.hgetall(self.hash_key))
        except redis_exceptions.RedisError as exc:
            raise CacheError(f"redis hgetall failed: {exc}") from exc


class CacheStatus(enum.Enum):
    DISABLED = "disabled"
    CONNECTED = "connected"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CacheHandle:
    """
    Outcome of the startup connection attempt.

    The handle is built once and never mutated; only a CONNECTED handle
    carries a client.
    """

    status: CacheStatus
    client: Optional[FortuneCache] = None

    @classmethod
    def disabled(cls) -> "CacheHandle":
        return cls(CacheStatus.DISABLED)

    @classmethod
    def unavailable(cls) -> "CacheHandle":
        return cls(CacheStatus.UNAVAILABLE)

    @classmethod
    def connected(cls, client: FortuneCache) -> "CacheHandle":
        return cls(CacheStatus.CONNECTED, client)

    @property
    def is_connected(self) -> bool:
        return self.status is CacheStatus.CONNECTED


def connect_cache(
    settings: Settings,
    *,
    factory: Callable[[str], FortuneCache] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> CacheHandle:
    """
    Establish the cache connection once at startup.

    Retries a fixed number of times with a fixed delay between attempts.
    Once the attempts are exhausted the cache stays unavailable until the
    process restarts.

    Args:
        settings: Backend settings; an unset ``redis_dns`` disables the cache.
        factory: Builds a client for a URL (defaults to RedisFortuneCache).
        sleep: Delay function, injectable for tests.

    Returns:
        CacheHandle: DISABLED, CONNECTED or UNAVAILABLE.
    """
    url = settings.redis_url
    if not url:
        logger.info("redis config not set, running without cache")
        return CacheHandle.disabled()

    if factory is None:

        def factory(target: str) -> FortuneCache:
            return RedisFortuneCache(
                url=target,
                hash_key=settings.redis_hash_key,
                timeout=settings.cache_timeout_seconds,
            )

    attempts = settings.cache_connect_attempts
    for attempt in range(1, attempts + 1):
        try:
            client = factory(url)
            client.ping()
        except (CacheError, redis_exceptions.RedisError) as exc:
            logger.warning("Attempt %d: redis connection failed: %s", attempt, exc)
        else:
            logger.info("Successfully connected to Redis at %s", url)
            return CacheHandle.connected(client)
        if attempt < attempts:
            sleep(settings.cache_retry_delay_seconds)

    logger.error("Failed to connect to redis after %d attempts", attempts)
    return CacheHandle.unavailable()
