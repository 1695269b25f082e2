"""Plant service layer for PlantProxy.

Provides the archive query service and single-record resolvers, plus factory
functions that wire them from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PlantProxy.services.plants import PlantQueryService, PlantRecordResolver, RecordSource
from PlantProxy.sources.airtable.mapper import FieldMap, RecordMapper

if TYPE_CHECKING:
    from PlantProxy.cache import CacheBackend, CachedPlantResolver
    from PlantProxy.config import AppConfig
    from PlantProxy.sources.airtable.client import AirtableApiClient


def create_airtable_client(config: AppConfig) -> AirtableApiClient:
    """Create the Airtable HTTP client.

    Args:
        config: Application configuration.

    Returns:
        Configured client; callers own closing it.

    Raises:
        ValueError: If the access token environment variable is not set.
    """
    from PlantProxy.sources.airtable.client import AirtableApiClient

    airtable = config.airtable
    if not airtable.token:
        raise ValueError(
            f"Airtable token not found: {airtable.token_env} environment variable not set. "
            "Set it in your .env file or shell environment."
        )
    return AirtableApiClient(
        base_id=airtable.base_id,
        table=airtable.table,
        token=airtable.token,
        api_url=airtable.api_url,
        timeout=airtable.timeout,
        return_fields_by_id=airtable.return_fields_by_id,
    )


def create_record_mapper(config: AppConfig) -> RecordMapper:
    """Create a record mapper from the configured field map."""
    return RecordMapper(FieldMap(config.airtable.field_map))


def create_query_service(config: AppConfig, source: RecordSource) -> PlantQueryService:
    """Create the archive query service over ``source``."""
    return PlantQueryService(
        source=source,
        mapper=create_record_mapper(config),
        fields=config.airtable.fields,
    )


def create_record_resolver(
    config: AppConfig,
    source: RecordSource,
    shared_cache: CacheBackend | None = None,
) -> CachedPlantResolver:
    """Create a cached single-record resolver over ``source``.

    Args:
        config: Application configuration.
        source: Record source used on cache misses.
        shared_cache: Shared cache tier; built from config when omitted.

    Returns:
        Resolver consulting memo and shared cache first.
    """
    from PlantProxy.cache import CachedPlantResolver, create_cache_backend

    resolver = PlantRecordResolver(
        source=source,
        mapper=create_record_mapper(config),
        fields=config.airtable.fields,
    )
    return CachedPlantResolver(
        resolver=resolver,
        shared=shared_cache if shared_cache is not None else create_cache_backend(config),
        ttl=config.cache.ttl,
    )


__all__ = [
    "PlantQueryService",
    "PlantRecordResolver",
    "RecordSource",
    "create_airtable_client",
    "create_query_service",
    "create_record_mapper",
    "create_record_resolver",
]
