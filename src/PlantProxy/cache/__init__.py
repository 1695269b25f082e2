"""Caching for single-record lookups.

Provides the shared-cache backends and the two-tier cached resolver, plus a
factory that builds the backend selected in configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PlantProxy.cache.backends import CacheBackend, MemoryTTLCache, RedisCache
from PlantProxy.cache.lookup import CachedPlantResolver, lookup_cache_key

if TYPE_CHECKING:
    from PlantProxy.config import AppConfig


def create_cache_backend(config: AppConfig) -> CacheBackend:
    """Create the shared cache backend from configuration.

    Args:
        config: Application configuration.

    Returns:
        Configured cache backend.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    backend = config.cache.backend
    if backend == "memory":
        return MemoryTTLCache()
    if backend == "redis":
        return RedisCache.from_url(config.cache.redis_url, prefix=config.cache.key_prefix)
    raise ValueError(f"Unsupported cache backend: {backend}")


__all__ = [
    "CacheBackend",
    "CachedPlantResolver",
    "MemoryTTLCache",
    "RedisCache",
    "create_cache_backend",
    "lookup_cache_key",
]
