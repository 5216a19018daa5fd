import datetime
import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from computation_cache import CacheKeys, ComputationCache, dataset_fingerprint
from models import LoggedSet


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class Counter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return self.calls


class ComputationCacheTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.cache = ComputationCache(default_ttl=60, clock=self.clock)
        self.compute = Counter()

    def test_same_key_and_ref_computes_once(self) -> None:
        data = [1, 2, 3]
        self.assertEqual(self.cache.get_or_compute("k", data, self.compute), 1)
        self.assertEqual(self.cache.get_or_compute("k", data, self.compute), 1)
        self.assertEqual(self.compute.calls, 1)

    def test_different_ref_recomputes(self) -> None:
        self.cache.get_or_compute("k", [1, 2, 3], self.compute)
        self.assertEqual(self.cache.get_or_compute("k", [1, 2, 3], self.compute), 2)
        self.assertEqual(self.compute.calls, 2)

    def test_fingerprints_compare_by_value(self) -> None:
        self.cache.get_or_compute("k", "abc" * 3, self.compute)
        self.cache.get_or_compute("k", "".join(["abc"] * 3), self.compute)
        self.assertEqual(self.compute.calls, 1)
        self.cache.get_or_compute("k", "other", self.compute)
        self.assertEqual(self.compute.calls, 2)

    def test_ttl_expiry(self) -> None:
        data = object()
        self.cache.get_or_compute("k", data, self.compute)
        self.clock.now += 59
        self.cache.get_or_compute("k", data, self.compute)
        self.assertEqual(self.compute.calls, 1)
        self.clock.now += 1
        self.cache.get_or_compute("k", data, self.compute)
        self.assertEqual(self.compute.calls, 2)

    def test_per_call_ttl(self) -> None:
        data = object()
        self.cache.get_or_compute("k", data, self.compute, ttl=5)
        self.clock.now += 6
        self.cache.get_or_compute("k", data, self.compute, ttl=5)
        self.assertEqual(self.compute.calls, 2)

    def test_lookup_ttl_shorter_than_stored(self) -> None:
        data = object()
        self.cache.get_or_compute("k", data, self.compute)
        self.clock.now += 6
        self.cache.get_or_compute("k", data, self.compute)
        self.assertEqual(self.compute.calls, 1)
        self.cache.get_or_compute("k", data, self.compute, ttl=5)
        self.assertEqual(self.compute.calls, 2)

    def test_clear_and_invalidate(self) -> None:
        data = object()
        self.cache.get_or_compute("a", data, self.compute)
        self.cache.get_or_compute("b", data, self.compute)
        self.cache.invalidate("a")
        self.assertNotIn("a", self.cache)
        self.assertIn("b", self.cache)
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)
        self.cache.get_or_compute("b", data, self.compute)
        self.assertEqual(self.compute.calls, 3)

    def test_invalid_ttl(self) -> None:
        with self.assertRaises(ValueError):
            ComputationCache(default_ttl=0)


class HelpersTestCase(unittest.TestCase):
    def test_dataset_fingerprint(self) -> None:
        ts = datetime.datetime(2024, 1, 1, 9, 0)
        a = [LoggedSet("Squat", 100.0, 5, 0, ts)]
        b = [LoggedSet("Squat", 100.0, 5, 0, ts)]
        c = [LoggedSet("Squat", 102.5, 5, 0, ts)]
        self.assertEqual(dataset_fingerprint(a), dataset_fingerprint(b))
        self.assertNotEqual(dataset_fingerprint(a), dataset_fingerprint(c))

    def test_cache_keys(self) -> None:
        self.assertEqual(CacheKeys.weekly_sets("f1", "30d", "group"), "weeklySets:v2:f1:30d:group")
        self.assertEqual(CacheKeys.build("x", "", None, 3), "x:v2:all::3")
        self.assertNotEqual(
            CacheKeys.muscle_series("f1", "weekly", "group"),
            CacheKeys.muscle_series("f1", "weekly", "muscle"),
        )


if __name__ == "__main__":
    unittest.main()
