"""Two-tier cache in front of single-record lookups.

Tier one is a plain dict memo owned by the caller for the duration of one
top-level invocation; tier two is a shared `CacheBackend` with a short TTL.
Only successful lookups are stored. Errors always reach the caller.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import MutableMapping

from PlantProxy.cache.backends import CacheBackend
from PlantProxy.core.models import NormalizedPlant
from PlantProxy.services.plants import PlantRecordResolver
from PlantProxy.utils.log import log

DEFAULT_TTL = 60

LookupMemo = MutableMapping[str, NormalizedPlant]


def lookup_cache_key(plant_id: str, attachment_mode: str) -> str:
    """Return the cache key for one lookup."""
    return f"{plant_id}|{attachment_mode}"


@dataclass(slots=True)
class CachedPlantResolver:
    """Consult memo and shared cache before resolving a plant."""

    resolver: PlantRecordResolver
    shared: CacheBackend
    ttl: int = DEFAULT_TTL

    def get_by_id(
        self,
        plant_id: str | None,
        attachment_mode: str = "url",
        memo: LookupMemo | None = None,
    ) -> NormalizedPlant:
        """Resolve a plant through both cache tiers.

        Args:
            plant_id: Backing-store record identifier.
            attachment_mode: ``url`` or ``object``.
            memo: Per-invocation memo; None disables the first tier.

        Returns:
            A copy of the normalized plant.

        Raises:
            PlantProxyError: Propagated from the resolver.
        """
        key = lookup_cache_key((plant_id or "").strip(), attachment_mode)

        if memo is not None and key in memo:
            log.debug("Lookup memo hit: %s", key)
            return copy.deepcopy(memo[key])

        cached = self.shared.get(key)
        if cached is not None:
            log.debug("Lookup cache hit: %s", key)
            if memo is not None:
                memo[key] = cached
            return copy.deepcopy(cached)

        plant = self.resolver.get_by_id(plant_id, attachment_mode)
        self.shared.set(key, plant, self.ttl)
        if memo is not None:
            memo[key] = plant
        return copy.deepcopy(plant)
