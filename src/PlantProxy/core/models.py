from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from PlantProxy.core.query import SortSpec

# Mapping of display key to value. Well-known keys are listed on `PlantCard`;
# field widgets may address any display key from the configured field map.
NormalizedPlant = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file reference stored in a record field.

    Attributes:
        url: Public URL of the file.
        filename: Original filename if provided.
        type: MIME type if provided.
        size: Size in bytes if provided.
    """

    url: str
    filename: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping."""
        return {
            "url": self.url,
            "filename": self.filename,
            "type": self.type,
            "size": self.size,
        }


@dataclass(frozen=True, slots=True)
class PlantCard:
    """Subset of a plant used by archive grid cards.

    Attributes:
        id: Backing-store record identifier.
        name_en: English name.
        name_latin: Latin name.
        name_halq: Halq'eméylem name and meaning.
        feature_image: First feature image URL.
        soundbite: First Halq'eméylem soundbite URL.
    """

    id: str
    name_en: Optional[str] = None
    name_latin: Optional[str] = None
    name_halq: Optional[str] = None
    feature_image: Optional[str] = None
    soundbite: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Page:
    """One page of archive results.

    Attributes:
        plants: Cards in backing-store order.
        next_cursor: Continuation token for the next page, if any.
        has_more: True when a non-empty continuation token was returned.
        count: Number of cards on this page.
    """

    plants: Sequence[PlantCard]
    next_cursor: Optional[str]
    has_more: bool
    count: int


@dataclass(frozen=True, slots=True)
class RecordQuery:
    """Request handed to the fetch collaborator.

    Attributes:
        page_size: Number of records to request.
        cursor: Opaque continuation token; empty for the first page.
        formula: Filter formula, or None to match all records.
        sort: Optional sort specification.
        fields: Explicit field selection; empty means all fields.
    """

    page_size: int
    cursor: str = ""
    formula: Optional[str] = None
    sort: Optional[SortSpec] = None
    fields: Sequence[str] = ()
