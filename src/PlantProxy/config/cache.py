"""Cache domain configuration for single-record lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PlantProxy.config.common import check_non_empty, expect_int, expect_str, get_optional_value, get_section

_ALLOWED_BACKENDS = {"memory", "redis"}


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Cache configuration."""

    backend: str
    ttl: int
    redis_url: str
    key_prefix: str


def load_cache(raw: Mapping[str, Any]) -> CacheConfig:
    """Load cache domain config from the optional ``cache`` section."""
    section = get_section(raw, "cache", required=False)
    return CacheConfig(
        backend=expect_str(get_optional_value(section, "backend", "memory"), "cache.backend").strip().lower(),
        ttl=expect_int(get_optional_value(section, "ttl", 60), "cache.ttl"),
        redis_url=expect_str(get_optional_value(section, "redis_url", ""), "cache.redis_url"),
        key_prefix=expect_str(get_optional_value(section, "key_prefix", "plant-proxy:"), "cache.key_prefix"),
    )


def check_cache(config: CacheConfig) -> None:
    """Validate cache domain constraints.

    Raises:
        ValueError: If values violate cache constraints.
    """
    if config.backend not in _ALLOWED_BACKENDS:
        raise ValueError(f"cache.backend must be one of {sorted(_ALLOWED_BACKENDS)}")
    if config.ttl < 0:
        raise ValueError("cache.ttl must be >= 0")
    if config.backend == "redis":
        check_non_empty(config.redis_url, "cache.redis_url")
