from __future__ import annotations

"""Public configuration API for PlantProxy."""

from PlantProxy.config.airtable import AirtableConfig
from PlantProxy.config.app import (
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from PlantProxy.config.archive import ArchiveConfig
from PlantProxy.config.cache import CacheConfig
from PlantProxy.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "AirtableConfig",
    "ArchiveConfig",
    "CacheConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "check_cross_domain",
]
