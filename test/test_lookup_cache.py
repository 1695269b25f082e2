"""Tests for the two-tier plant lookup cache."""

import json
import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import redis

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PlantProxy.cache import CachedPlantResolver, MemoryTTLCache, RedisCache, lookup_cache_key
from PlantProxy.core.errors import NotFoundError, UpstreamTransportError


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class _CountingResolver:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result if result is not None else {"id": "rec1", "name_en": "Cedar"}
        self.error = error
        self.calls = []

    def get_by_id(self, plant_id, attachment_mode="url"):
        self.calls.append((plant_id, attachment_mode))
        if self.error is not None:
            raise self.error
        return dict(self.result)


class TestMemoryTTLCache(unittest.TestCase):
    def test_entry_expires_after_ttl(self) -> None:
        clock = _FakeClock()
        cache = MemoryTTLCache(clock=clock)
        cache.set("k", {"v": 1}, 60)

        clock.now += 59
        self.assertEqual(cache.get("k"), {"v": 1})
        clock.now += 1
        self.assertIsNone(cache.get("k"))
        self.assertEqual(len(cache), 0)

    def test_writes_sweep_expired_entries(self) -> None:
        clock = _FakeClock()
        cache = MemoryTTLCache(clock=clock, sweep_every=3)
        cache.set("old-1", 1, 10)
        cache.set("old-2", 2, 10)
        clock.now += 11
        cache.set("new", 3, 10)
        self.assertEqual(len(cache), 1)
        self.assertEqual(cache.get("new"), 3)

    def test_non_positive_ttl_is_not_stored(self) -> None:
        cache = MemoryTTLCache()
        cache.set("k", "v", 0)
        self.assertIsNone(cache.get("k"))

    def test_delete_and_clear(self) -> None:
        cache = MemoryTTLCache()
        cache.set("a", 1, 60)
        cache.set("b", 2, 60)
        cache.delete("a")
        self.assertIsNone(cache.get("a"))
        cache.clear()
        self.assertEqual(len(cache), 0)


class TestCachedPlantResolver(unittest.TestCase):
    def test_cache_key_includes_mode(self) -> None:
        self.assertEqual(lookup_cache_key("rec1", "url"), "rec1|url")
        self.assertNotEqual(lookup_cache_key("rec1", "url"), lookup_cache_key("rec1", "object"))

    def test_memo_serves_repeat_lookups(self) -> None:
        inner = _CountingResolver()
        resolver = CachedPlantResolver(resolver=inner, shared=MemoryTTLCache(), ttl=60)
        memo: dict = {}

        first = resolver.get_by_id("rec1", "url", memo)
        second = resolver.get_by_id("rec1", "url", memo)

        self.assertEqual(first, second)
        self.assertEqual(len(inner.calls), 1)
        self.assertIn("rec1|url", memo)

    def test_shared_cache_serves_new_invocations(self) -> None:
        inner = _CountingResolver()
        shared = MemoryTTLCache()
        resolver = CachedPlantResolver(resolver=inner, shared=shared, ttl=60)

        resolver.get_by_id("rec1", "url", {})
        memo: dict = {}
        resolver.get_by_id("rec1", "url", memo)

        self.assertEqual(len(inner.calls), 1)
        self.assertIn("rec1|url", memo)

    def test_modes_are_cached_separately(self) -> None:
        inner = _CountingResolver()
        resolver = CachedPlantResolver(resolver=inner, shared=MemoryTTLCache(), ttl=60)
        resolver.get_by_id("rec1", "url")
        resolver.get_by_id("rec1", "object")
        self.assertEqual(inner.calls, [("rec1", "url"), ("rec1", "object")])

    def test_expired_shared_entry_refetches(self) -> None:
        clock = _FakeClock()
        inner = _CountingResolver()
        resolver = CachedPlantResolver(resolver=inner, shared=MemoryTTLCache(clock=clock), ttl=60)
        resolver.get_by_id("rec1")
        clock.now += 61
        resolver.get_by_id("rec1")
        self.assertEqual(len(inner.calls), 2)

    def test_errors_are_not_cached(self) -> None:
        for error in (NotFoundError("Plant not found: rec1"), UpstreamTransportError("timed out")):
            with self.subTest(error=type(error).__name__):
                inner = _CountingResolver(error=error)
                shared = MemoryTTLCache()
                resolver = CachedPlantResolver(resolver=inner, shared=shared, ttl=60)
                memo: dict = {}
                for _ in range(2):
                    with self.assertRaises(type(error)):
                        resolver.get_by_id("rec1", "url", memo)
                self.assertEqual(len(inner.calls), 2)
                self.assertEqual(memo, {})
                self.assertEqual(len(shared), 0)

    def test_callers_get_independent_copies(self) -> None:
        resolver = CachedPlantResolver(resolver=_CountingResolver(), shared=MemoryTTLCache(), ttl=60)
        memo: dict = {}
        first = resolver.get_by_id("rec1", "url", memo)
        first["name_en"] = "changed"
        self.assertEqual(resolver.get_by_id("rec1", "url", memo)["name_en"], "Cedar")


class TestRedisCache(unittest.TestCase):
    def test_set_uses_setex_with_prefix_and_json(self) -> None:
        client = MagicMock()
        RedisCache(client, prefix="pp:").set("rec1|url", {"id": "rec1"}, 60)
        client.setex.assert_called_once_with("pp:rec1|url", 60, json.dumps({"id": "rec1"}))

    def test_get_decodes_json(self) -> None:
        client = MagicMock()
        client.get.return_value = b'{"id": "rec1"}'
        self.assertEqual(RedisCache(client, prefix="pp:").get("rec1|url"), {"id": "rec1"})
        client.get.assert_called_once_with("pp:rec1|url")

    def test_get_miss_returns_none(self) -> None:
        client = MagicMock()
        client.get.return_value = None
        self.assertIsNone(RedisCache(client).get("rec1|url"))

    def test_redis_errors_degrade_to_cache_miss(self) -> None:
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.setex.side_effect = redis.ConnectionError("down")
        cache = RedisCache(client)
        with self.assertLogs("PlantProxy", level="WARNING"):
            self.assertIsNone(cache.get("rec1|url"))
            cache.set("rec1|url", {"id": "rec1"}, 60)

    def test_delete_and_clear_failures_are_logged(self) -> None:
        client = MagicMock()
        client.delete.side_effect = redis.ConnectionError("down")
        client.scan_iter.side_effect = redis.ConnectionError("down")
        cache = RedisCache(client)
        with self.assertLogs("PlantProxy", level="WARNING") as logs:
            cache.delete("rec1|url")
            cache.clear()
        self.assertEqual(len(logs.records), 2)

    def test_clear_only_drops_prefixed_keys(self) -> None:
        client = MagicMock()
        client.scan_iter.return_value = iter([b"pp:a", b"pp:b"])
        RedisCache(client, prefix="pp:").clear()
        client.scan_iter.assert_called_once_with(match="pp:*", count=100)
        self.assertEqual(client.delete.call_count, 2)


if __name__ == "__main__":
    unittest.main()
