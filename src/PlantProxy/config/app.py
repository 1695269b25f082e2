from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from PlantProxy.config.airtable import AirtableConfig, check_airtable, load_airtable
from PlantProxy.config.archive import ArchiveConfig, check_archive, load_archive
from PlantProxy.config.cache import CacheConfig, check_cache, load_cache
from PlantProxy.config.runtime import RuntimeConfig, check_runtime, load_runtime

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    airtable: AirtableConfig
    archive: ArchiveConfig
    cache: CacheConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    airtable = load_airtable(raw)
    archive = load_archive(raw)
    cache = load_cache(raw)

    check_runtime(runtime)
    check_airtable(airtable)
    check_archive(archive)
    check_cache(cache)

    config = AppConfig(runtime=runtime, airtable=airtable, archive=archive, cache=cache)
    check_cross_domain(config)
    return config


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def check_cross_domain(config: AppConfig) -> None:
    """Validate cross-domain constraints."""
    allow_list = set(config.airtable.fields)
    if allow_list:
        missing = [key for key in config.airtable.field_map if key not in allow_list]
        if missing:
            raise ValueError(f"airtable.fields must include every airtable.field_map key, missing: {missing}")


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
