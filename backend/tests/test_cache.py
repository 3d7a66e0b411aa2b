import unittest
from unittest.mock import MagicMock, patch

from redis import exceptions as redis_exceptions

from backend.cache import (
    CacheError,
    CacheMissError,
    CacheStatus,
    InMemoryFortuneCache,
    RedisFortuneCache,
    connect_cache,
)
from backend.config import Settings


class ConnectCacheTests(unittest.TestCase):
    def test_disabled_without_address(self):
        factory = MagicMock()
        sleep = MagicMock()
        handle = connect_cache(Settings(redis_dns=None), factory=factory, sleep=sleep)
        self.assertEqual(handle.status, CacheStatus.DISABLED)
        self.assertIsNone(handle.client)
        factory.assert_not_called()
        sleep.assert_not_called()

    def test_connects_on_first_attempt(self):
        cache = InMemoryFortuneCache()
        factory = MagicMock(return_value=cache)
        handle = connect_cache(
            Settings(redis_dns="cache.local"), factory=factory, sleep=MagicMock()
        )
        self.assertTrue(handle.is_connected)
        self.assertIs(handle.client, cache)
        factory.assert_called_once_with("redis://cache.local:6379")

    def test_retries_with_fixed_delay_then_connects(self):
        flaky = MagicMock()
        flaky.ping.side_effect = [CacheError("down"), CacheError("down"), None]
        sleep = MagicMock()
        handle = connect_cache(
            Settings(redis_dns="cache.local"), factory=lambda url: flaky, sleep=sleep
        )
        self.assertTrue(handle.is_connected)
        self.assertEqual(flaky.ping.call_count, 3)
        self.assertEqual(sleep.call_count, 2)
        sleep.assert_called_with(2.0)

    def test_gives_up_after_five_attempts(self):
        down = InMemoryFortuneCache(available=False)
        sleep = MagicMock()
        with self.assertLogs("backend.cache", level="ERROR") as logs:
            handle = connect_cache(
                Settings(redis_dns="cache.local"), factory=lambda url: down, sleep=sleep
            )
        self.assertEqual(handle.status, CacheStatus.UNAVAILABLE)
        self.assertIsNone(handle.client)
        self.assertEqual(sleep.call_count, 4)
        self.assertIn("after 5 attempts", logs.output[0])

    def test_factory_redis_error_counts_as_failed_attempt(self):
        factory = MagicMock(side_effect=redis_exceptions.ConnectionError("refused"))
        handle = connect_cache(
            Settings(redis_dns="cache.local", cache_connect_attempts=2),
            factory=factory,
            sleep=MagicMock(),
        )
        self.assertEqual(handle.status, CacheStatus.UNAVAILABLE)
        self.assertEqual(factory.call_count, 2)


class RedisFortuneCacheTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("backend.cache.redis.Redis.from_url")
        self.from_url = patcher.start()
        self.addCleanup(patcher.stop)
        self.client = self.from_url.return_value
        self.cache = RedisFortuneCache(url="redis://cache.local:6379", timeout=1.5)

    def test_client_uses_timeouts(self):
        self.from_url.assert_called_once_with(
            "redis://cache.local:6379",
            decode_responses=True,
            socket_timeout=1.5,
            socket_connect_timeout=1.5,
        )

    def test_get_reads_fortunes_hash(self):
        self.client.hget.return_value = "X"
        self.assertEqual(self.cache.get("5"), "X")
        self.client.hget.assert_called_once_with("fortunes", "5")

    def test_get_missing_raises_miss(self):
        self.client.hget.return_value = None
        with self.assertRaises(CacheMissError):
            self.cache.get("5")

    def test_get_connection_error(self):
        self.client.hget.side_effect = redis_exceptions.ConnectionError("reset")
        with self.assertRaises(CacheError):
            self.cache.get("5")

    def test_set_writes_fortunes_hash(self):
        self.cache.set("5", "X")
        self.client.hset.assert_called_once_with("fortunes", "5", "X")

    def test_set_timeout(self):
        self.client.hset.side_effect = redis_exceptions.TimeoutError("slow")
        with self.assertRaises(CacheError):
            self.cache.set("5", "X")

    def test_list_all(self):
        self.client.hgetall.return_value = {"1": "A", "5": "X"}
        self.assertEqual(self.cache.list_all(), {"1": "A", "5": "X"})
        self.client.hgetall.assert_called_once_with("fortunes")

    def test_ping_failure(self):
        self.client.ping.side_effect = redis_exceptions.ConnectionError("refused")
        with self.assertRaises(CacheError):
            self.cache.ping()


if __name__ == "__main__":
    unittest.main()
