"""Plant query and lookup services.

`PlantQueryService` turns a `PlantFilter` into one archive `Page`;
`PlantRecordResolver` resolves a single record by identifier. Both delegate
the HTTP round trip to a `RecordSource` and propagate its errors unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from PlantProxy.core.errors import InvalidInputError, InvalidRecordError, NotFoundError
from PlantProxy.core.models import NormalizedPlant, Page, PlantCard, RecordQuery
from PlantProxy.core.query import PlantFilter, clamp_page_size, resolve_sort
from PlantProxy.sources.airtable.formula import compile_plant_filter, record_id_formula
from PlantProxy.sources.airtable.mapper import (
    ATTACHMENT_KEYS,
    RecordMapper,
    first_attachment_url,
    normalize_attachments,
)
from PlantProxy.utils.log import log

ATTACHMENT_MODES = ("url", "object")


class RecordSource(Protocol):
    """Protocol for the backing-store fetch collaborator."""

    def list_records(self, query: RecordQuery) -> Mapping[str, Any]:
        """Return a payload with ``records`` and optional ``offset``."""
        raise NotImplementedError


@dataclass(slots=True)
class PlantQueryService:
    """Fetch archive pages of plant cards."""

    source: RecordSource
    mapper: RecordMapper
    fields: Sequence[str] = ()

    def fetch_page(self, plant_filter: PlantFilter) -> Page:
        """Fetch one page of plant cards.

        Args:
            plant_filter: Normalized filter, sort and pagination input.

        Returns:
            Page of cards with the continuation cursor.

        Raises:
            UpstreamError: Propagated from the record source.
        """
        query = RecordQuery(
            page_size=clamp_page_size(plant_filter.page_size),
            cursor=plant_filter.cursor,
            formula=compile_plant_filter(plant_filter),
            sort=resolve_sort(plant_filter.sort),
            fields=tuple(self.fields),
        )
        payload = self.source.list_records(query)

        cards = self._map_cards(payload.get("records"))
        offset = payload.get("offset")
        next_cursor = offset if isinstance(offset, str) and offset else None
        log.info("Fetched %d plants (has_more=%s)", len(cards), next_cursor is not None)
        return Page(
            plants=tuple(cards),
            next_cursor=next_cursor,
            has_more=next_cursor is not None,
            count=len(cards),
        )

    def _map_cards(self, records: Any) -> list[PlantCard]:
        if not isinstance(records, list):
            return []

        cards: list[PlantCard] = []
        for record in records:
            if not _is_card_record(record):
                log.warning("Skipping malformed record: %s", _record_label(record))
                continue
            cards.append(self.mapper.map_card(record["id"], record["fields"]))
        return cards


@dataclass(slots=True)
class PlantRecordResolver:
    """Resolve one plant record by identifier."""

    source: RecordSource
    mapper: RecordMapper
    fields: Sequence[str] = ()

    def get_by_id(self, plant_id: str | None, attachment_mode: str = "url") -> NormalizedPlant:
        """Fetch and normalize a single plant.

        Attachment fields are replaced with the first URL (``url`` mode) or
        the full list of attachment dicts (``object`` mode).

        Args:
            plant_id: Backing-store record identifier.
            attachment_mode: ``url`` or ``object``.

        Returns:
            Normalized plant including ``id``.

        Raises:
            InvalidInputError: If the identifier or mode is invalid.
            NotFoundError: If no record matches.
            InvalidRecordError: If the record has no ``fields``.
            UpstreamError: Propagated from the record source.
        """
        plant_id = (plant_id or "").strip()
        if not plant_id:
            raise InvalidInputError("Plant id is required")
        if attachment_mode not in ATTACHMENT_MODES:
            raise InvalidInputError(f"Unknown attachment mode: {attachment_mode}")

        payload = self.source.list_records(
            RecordQuery(page_size=1, formula=record_id_formula(plant_id), fields=tuple(self.fields))
        )
        records = payload.get("records")
        if not isinstance(records, list) or not records:
            raise NotFoundError(f"Plant not found: {plant_id}")

        record = records[0]
        if not isinstance(record, Mapping) or not isinstance(record.get("fields"), Mapping):
            raise InvalidRecordError(f"Plant record has no fields: {plant_id}")

        plant = self.mapper.map_fields(record["fields"])
        for key in ATTACHMENT_KEYS:
            if key not in plant:
                continue
            if attachment_mode == "object":
                plant[key] = [item.as_dict() for item in normalize_attachments(plant[key])]
            else:
                plant[key] = first_attachment_url(plant[key])
        plant["id"] = str(record.get("id") or plant_id)
        return plant


def _is_card_record(record: Any) -> bool:
    if not isinstance(record, Mapping) or not isinstance(record.get("fields"), Mapping):
        return False
    record_id = record.get("id")
    return isinstance(record_id, str) and bool(record_id)


def _record_label(record: Any) -> str:
    if isinstance(record, Mapping):
        return str(record.get("id", "<no id>"))
    return type(record).__name__
