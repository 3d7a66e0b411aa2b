import threading
import unittest

from backend.store import DEFAULT_FORTUNES, Fortune, FortuneStore


class FortuneStoreTests(unittest.TestCase):
    def test_with_defaults(self):
        store = FortuneStore.with_defaults()
        self.assertEqual(len(store), len(DEFAULT_FORTUNES))
        for fortune_id, message in DEFAULT_FORTUNES.items():
            self.assertEqual(store.get(fortune_id), Fortune(fortune_id, message))

    def test_overlay_replaces_defaults(self):
        store = FortuneStore.with_defaults()
        loaded = store.overlay({"1": "Overridden", "9": "New"})
        self.assertEqual(loaded, 2)
        self.assertEqual(store.get("1").message, "Overridden")
        self.assertEqual(store.get("9").message, "New")
        self.assertEqual(len(store), len(DEFAULT_FORTUNES) + 1)

    def test_put_counts_overwrites_once(self):
        store = FortuneStore()
        store.put(Fortune("a", "first"))
        store.put(Fortune("a", "second"))
        store.put(Fortune("b", "third"))
        self.assertEqual(len(store.list()), 2)
        self.assertEqual(store.get("a").message, "second")
        self.assertEqual(sorted(store.ids()), ["a", "b"])

    def test_get_missing(self):
        self.assertIsNone(FortuneStore().get("zero"))

    def test_list_is_a_snapshot(self):
        store = FortuneStore([Fortune("1", "A")])
        snapshot = store.list()
        store.put(Fortune("2", "B"))
        self.assertEqual(snapshot, [Fortune("1", "A")])

    def test_concurrent_writers_and_readers(self):
        store = FortuneStore()

        def writer(offset):
            for i in range(200):
                store.put(Fortune(str(offset + i), f"message {offset + i}"))

        def reader():
            for _ in range(200):
                for fortune in store.list():
                    self.assertEqual(fortune.message, f"message {fortune.id}")

        threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(store), 800)


if __name__ == "__main__":
    unittest.main()
