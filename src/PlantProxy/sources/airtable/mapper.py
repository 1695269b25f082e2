"""Airtable record mapper.

Projects raw record fields (keyed by store-internal field identifiers) onto
stable display keys, and normalizes attachment values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from PlantProxy.core.models import Attachment, NormalizedPlant, PlantCard

FEATURE_IMAGE_KEY = "feature_image"
SOUNDBITE_KEY = "soundbite_halq"
ATTACHMENT_KEYS: tuple[str, ...] = (FEATURE_IMAGE_KEY, SOUNDBITE_KEY)


@dataclass(frozen=True, slots=True)
class FieldMap:
    """Immutable store-field-id to display-key mapping.

    Attributes:
        entries: Mapping of store field identifier to display key.
    """

    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def display_keys(self) -> tuple[str, ...]:
        """Return display keys in configuration order."""
        return tuple(self.entries.values())


@dataclass(frozen=True, slots=True)
class RecordMapper:
    """Map raw Airtable records into normalized plants."""

    field_map: FieldMap

    def map_fields(self, fields: Mapping[str, Any]) -> NormalizedPlant:
        """Project raw fields onto display keys.

        Every configured display key is present in the result; values missing
        from ``fields`` become None. Unmapped store fields are dropped.

        Args:
            fields: Raw ``fields`` mapping of one record.

        Returns:
            Mapping of display key to raw value.
        """
        return {key: fields.get(store_key) for store_key, key in self.field_map.entries.items()}

    def map_card(self, record_id: str, fields: Mapping[str, Any]) -> PlantCard:
        """Map raw fields into the archive card subset."""
        mapped = self.map_fields(fields)
        return PlantCard(
            id=record_id,
            name_en=mapped.get("name_en"),
            name_latin=mapped.get("name_latin"),
            name_halq=mapped.get("name_halq"),
            feature_image=first_attachment_url(mapped.get(FEATURE_IMAGE_KEY)),
            soundbite=first_attachment_url(mapped.get(SOUNDBITE_KEY)),
        )


def normalize_attachments(value: Any) -> list[Attachment]:
    """Normalize an attachment field value into a list of attachments.

    A mapping with a top-level ``url`` key is a single attachment; a list or
    tuple is a sequence of attachments; anything else yields an empty list.
    Items without a non-empty string ``url`` are dropped.

    Args:
        value: Raw field value.

    Returns:
        Attachments in source order.
    """
    if isinstance(value, Mapping):
        items: Any = [value] if "url" in value else []
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []

    out: list[Attachment] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        url = item.get("url")
        if not isinstance(url, str) or not url:
            continue
        out.append(
            Attachment(
                url=url,
                filename=item.get("filename"),
                type=item.get("type"),
                size=item.get("size"),
            )
        )
    return out


def first_attachment_url(value: Any) -> str | None:
    """Return the URL of the first attachment, or None.

    Single-valued displays (card thumbnails, image widgets) only ever show
    the first attachment of a field.
    """
    attachments = normalize_attachments(value)
    return attachments[0].url if attachments else None
