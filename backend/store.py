"""
In-memory fortune store shared by all request handlers.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional

DEFAULT_FORTUNES: dict[str, str] = {
    "1": "A new voyage will fill your life with untold memories.",
    "2": "The measure of time to your next goal is the measure of your discipline.",
    "3": "The only way to do well is to do better each day.",
    "4": "It ain't over till it's EOF.",
}


@dataclass(frozen=True)
class Fortune:
    id: str
    message: str


class ReadWriteLock:
    """Allows many concurrent readers or a single writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            # Waiting writers take priority so readers cannot starve them.
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class FortuneStore:
    """
    Thread-safe mapping of fortune id to Fortune.

    The lock is held only for the duration of a single map operation, so
    callers must never hold it while talking to the cache.
    """

    def __init__(self, fortunes: Iterable[Fortune] = ()):
        self._lock = ReadWriteLock()
        self._fortunes: Dict[str, Fortune] = {f.id: f for f in fortunes}

    @classmethod
    def with_defaults(cls) -> "FortuneStore":
        """Create a store seeded with the built-in fortunes."""
        return cls(
            Fortune(id=fortune_id, message=message)
            for fortune_id, message in DEFAULT_FORTUNES.items()
        )

    def overlay(self, entries: Mapping[str, str]) -> int:
        """Insert id -> message entries, replacing existing ids."""
        fortunes = [Fortune(id=k, message=v) for k, v in entries.items()]
        with self._lock.write():
            for fortune in fortunes:
                self._fortunes[fortune.id] = fortune
        return len(fortunes)

    def list(self) -> list[Fortune]:
        with self._lock.read():
            return list(self._fortunes.values())

    def ids(self) -> list[str]:
        with self._lock.read():
            return list(self._fortunes)

    def get(self, fortune_id: str) -> Optional[Fortune]:
        with self._lock.read():
            return self._fortunes.get(fortune_id)

    def put(self, fortune: Fortune) -> Fortune:
        with self._lock.write():
            self._fortunes[fortune.id] = fortune
        return fortune

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._fortunes)
