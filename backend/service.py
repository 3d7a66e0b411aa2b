"""
Fortune operations combining the in-memory store with the optional cache.

Precedence rules:

* Listing reads only the local store.
* Point lookups prefer the cache when it is connected and write any hit
  back into the store; any cache failure falls back to the store.
* Creation writes through to the cache on a best-effort basis and always
  lands in the store.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from backend.cache import CacheError, CacheHandle, CacheMissError
from backend.store import Fortune, FortuneStore

logger = logging.getLogger(__name__)


class FortuneService:
    def __init__(
        self,
        store: FortuneStore,
        cache: CacheHandle | None = None,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.cache = cache or CacheHandle.disabled()
        self._rng = rng or random.Random()

    def load_from_cache(self) -> int:
        """
        Overlay every fortune held by the cache onto the store.

        Returns the number of fortunes loaded; zero when the cache is not
        connected or the bulk read fails.
        """
        if not self.cache.is_connected:
            return 0
        try:
            entries = self.cache.client.list_all()
        except CacheError as exc:
            logger.warning("Failed to load fortunes from cache: %s", exc)
            return 0
        loaded = self.store.overlay(entries)
        logger.info("Loaded %d fortunes from cache", loaded)
        return loaded

    def list_fortunes(self) -> list[Fortune]:
        return self.store.list()

    def get_fortune(self, fortune_id: str) -> Optional[Fortune]:
        if self.cache.is_connected:
            try:
                message = self.cache.client.get(fortune_id)
            except CacheMissError:
                logger.debug("Cache miss for fortune %s", fortune_id)
            except CacheError as exc:
                logger.warning("Cache lookup for fortune %s failed: %s", fortune_id, exc)
            else:
                return self.store.put(Fortune(id=fortune_id, message=message))
        return self.store.get(fortune_id)

    def random_fortune(self) -> Optional[Fortune]:
        ids = self.store.ids()
        if not ids:
            return None
        chosen = ids[self._rng.randrange(len(ids))]
        return self.get_fortune(chosen)

    def create_fortune(self, fortune: Fortune) -> Fortune:
        if self.cache.is_connected:
            try:
                self.cache.client.set(fortune.id, fortune.message)
            except CacheError as exc:
                logger.warning("Cache write for fortune %s failed: %s", fortune.id, exc)
        return self.store.put(fortune)
