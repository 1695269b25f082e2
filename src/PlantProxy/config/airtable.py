"""Airtable domain configuration: credentials, table and field mapping."""

from __future__ import annotations

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from PlantProxy.config.common import (
    check_non_empty,
    expect_bool,
    expect_float,
    expect_str,
    expect_str_list,
    expect_str_mapping,
    get_optional_value,
    get_required_value,
    get_section,
)
from PlantProxy.sources.airtable.client import AIRTABLE_API_URL, DEFAULT_TIMEOUT


@dataclass(frozen=True, slots=True)
class AirtableConfig:
    """Store validated Airtable access settings.

    Attributes:
        api_url: API root URL.
        base_id: Airtable base identifier.
        table: Table name or identifier.
        token_env: Environment variable holding the access token.
        token: Access token read from ``token_env``.
        timeout: Request timeout in seconds.
        return_fields_by_id: Request fields keyed by field id.
        fields: Explicit field allow-list; empty means all fields.
        field_map: Store field id to display key mapping.
    """

    api_url: str
    base_id: str
    table: str
    token_env: str
    token: str
    timeout: float
    return_fields_by_id: bool
    fields: tuple[str, ...]
    field_map: Mapping[str, str]


def load_airtable(raw: Mapping[str, Any]) -> AirtableConfig:
    """Load airtable domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed Airtable configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "airtable", required=True)
    token_env = expect_str(get_required_value(section, "token_env", "airtable.token_env"), "airtable.token_env")
    field_map = expect_str_mapping(
        get_required_value(section, "field_map", "airtable.field_map"),
        "airtable.field_map",
    )
    return AirtableConfig(
        api_url=expect_str(get_optional_value(section, "api_url", AIRTABLE_API_URL), "airtable.api_url"),
        base_id=expect_str(get_required_value(section, "base_id", "airtable.base_id"), "airtable.base_id"),
        table=expect_str(get_required_value(section, "table", "airtable.table"), "airtable.table"),
        token_env=token_env,
        token=_load_token_from_env(token_env),
        timeout=expect_float(get_optional_value(section, "timeout", DEFAULT_TIMEOUT), "airtable.timeout"),
        return_fields_by_id=expect_bool(
            get_optional_value(section, "return_fields_by_id", False),
            "airtable.return_fields_by_id",
        ),
        fields=tuple(expect_str_list(get_optional_value(section, "fields", []), "airtable.fields")),
        field_map=MappingProxyType(field_map),
    )


def check_airtable(config: AirtableConfig) -> None:
    """Validate airtable domain constraints.

    The token is not required here so offline commands and tests can load
    configuration; the client factory checks it before any request.

    Raises:
        ValueError: If values violate Airtable constraints.
    """
    check_non_empty(config.api_url, "airtable.api_url")
    check_non_empty(config.base_id, "airtable.base_id")
    check_non_empty(config.table, "airtable.table")
    check_non_empty(config.token_env, "airtable.token_env")
    if config.timeout <= 0:
        raise ValueError("airtable.timeout must be positive")
    if not config.field_map:
        raise ValueError("airtable.field_map must include at least one field")

    seen: set[str] = set()
    for store_key, display_key in config.field_map.items():
        check_non_empty(store_key, "airtable.field_map key")
        check_non_empty(display_key, f"airtable.field_map.{store_key}")
        if display_key in seen:
            raise ValueError(f"airtable.field_map has duplicate display key: {display_key}")
        seen.add(display_key)


def _load_token_from_env(token_env: str) -> str:
    """Load access token from environment variable."""
    return os.getenv(token_env, "").strip()
