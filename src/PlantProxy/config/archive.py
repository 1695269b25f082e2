"""Archive domain configuration: per-call defaults for the plant grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PlantProxy.config.common import expect_int, expect_str, get_optional_value, get_section
from PlantProxy.core.query import DEFAULT_PAGE_SIZE, DEFAULT_SORT, MAX_PAGE_SIZE, MIN_PAGE_SIZE, SORT_OPTIONS


@dataclass(frozen=True, slots=True)
class ArchiveConfig:
    """Archive grid defaults.

    Attributes:
        page_size: Default page size.
        sort: Default sort key.
        base_url: Page URL used for pagination links.
    """

    page_size: int
    sort: str
    base_url: str


def load_archive(raw: Mapping[str, Any]) -> ArchiveConfig:
    """Load archive domain config from the optional ``archive`` section."""
    section = get_section(raw, "archive", required=False)
    return ArchiveConfig(
        page_size=expect_int(get_optional_value(section, "page_size", DEFAULT_PAGE_SIZE), "archive.page_size"),
        sort=expect_str(get_optional_value(section, "sort", DEFAULT_SORT), "archive.sort").strip(),
        base_url=expect_str(get_optional_value(section, "base_url", ""), "archive.base_url"),
    )


def check_archive(config: ArchiveConfig) -> None:
    """Validate archive domain constraints.

    Raises:
        ValueError: If values violate archive constraints.
    """
    if not MIN_PAGE_SIZE <= config.page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"archive.page_size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")
    if config.sort not in SORT_OPTIONS:
        raise ValueError(f"archive.sort must be one of {sorted(SORT_OPTIONS)}")
