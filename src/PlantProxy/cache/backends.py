"""Shared cache backends for record lookups.

The shared tier of the lookup cache lives behind `CacheBackend`. Values are
JSON-compatible (normalized plants) and expire after a short TTL.
"""

from __future__ import annotations

import json
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

import redis

from PlantProxy.utils.log import log


class CacheBackend(ABC):
    """Abstract key/value cache with per-entry TTL."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the cached value, or None when missing or expired."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""


class MemoryTTLCache(CacheBackend):
    """Process-local TTL cache.

    Safe to share between threads serving independent requests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_every: int = 100) -> None:
        """Initialize an empty cache.

        Args:
            clock: Monotonic time source in seconds.
            sweep_every: Number of writes between removals of expired entries.
        """
        self._clock = clock
        self._sweep_every = max(1, sweep_every)
        self._writes = 0
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        with self._lock:
            now = self._clock()
            self._writes += 1
            if self._writes % self._sweep_every == 0:
                self._sweep(now)
            self._entries[key] = (now + ttl, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]


class RedisCache(CacheBackend):
    """Redis-backed cache shared across processes.

    Values are stored as JSON with ``SETEX``. Keys are namespaced with
    ``prefix`` so ``clear`` only drops this application's entries.
    Redis errors are logged; reads then miss and writes are skipped.
    """

    def __init__(self, client: redis.Redis, *, prefix: str = "plant-proxy:") -> None:
        """Initialize the backend.

        Args:
            client: Connected Redis client.
            prefix: Key namespace.
        """
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, *, prefix: str = "plant-proxy:", timeout: float = 1.0) -> RedisCache:
        """Build a backend from a ``redis://`` URL."""
        client = redis.Redis.from_url(url, socket_connect_timeout=timeout, socket_timeout=timeout)
        return cls(client, prefix=prefix)

    def get(self, key: str) -> Any:
        try:
            raw = self.client.get(self.prefix + key)
        except redis.RedisError as e:
            log.warning("Redis get failed for key '%s': %s", key, e)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            log.warning("Discarding undecodable cache entry '%s': %s", key, e)
            return None

    def set(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        try:
            self.client.setex(self.prefix + key, ttl, json.dumps(value))
        except redis.RedisError as e:
            log.warning("Redis set failed for key '%s': %s", key, e)

    def delete(self, key: str) -> None:
        try:
            self.client.delete(self.prefix + key)
        except redis.RedisError as e:
            log.warning("Redis delete failed for key '%s': %s", key, e)

    def clear(self) -> None:
        try:
            for key in self.client.scan_iter(match=self.prefix + "*", count=100):
                self.client.delete(key)
        except redis.RedisError as e:
            log.warning("Redis clear failed for prefix '%s': %s", self.prefix, e)
