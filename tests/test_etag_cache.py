import unittest

from knot_downloader.sync.etag_cache import EtagCache


class EtagCacheTests(unittest.TestCase):
    def test_starts_cold(self) -> None:
        cache = EtagCache()

        self.assertIsNone(cache.get("https://example.com/a.txt"))
        self.assertEqual(len(cache), 0)

    def test_put_overwrites_previous_token(self) -> None:
        cache = EtagCache()
        cache.put("https://example.com/a.txt", '"v1"')
        cache.put("https://example.com/a.txt", '"v2"')

        self.assertEqual(cache.get("https://example.com/a.txt"), '"v2"')
        self.assertIn("https://example.com/a.txt", cache)
        self.assertEqual(len(cache), 1)

    def test_keys_are_independent(self) -> None:
        cache = EtagCache()
        cache.put("https://example.com/a.txt", '"a"')

        self.assertIsNone(cache.get("https://example.com/b.txt"))


if __name__ == "__main__":
    unittest.main()
