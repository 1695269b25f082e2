from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
MAX_SEARCH_LENGTH = 100
DEFAULT_PAGE_SIZE = 12
DEFAULT_SORT = "name_asc"

FIELD_NAME_EN = "Plant Name (English)"
FIELD_NAME_LATIN = "Plant Name (Latin)"
FIELD_NAME_HALQ = "Plant Name (Halq'eméylem) and Meaning"
FIELD_UPDATED_AT = "Updated At"


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Sort field and direction understood by the backing store.

    Attributes:
        field: Backing-store field name.
        direction: Either ``asc`` or ``desc``.
    """

    field: str
    direction: str


SORT_OPTIONS: Mapping[str, SortSpec] = {
    "name_asc": SortSpec(FIELD_NAME_EN, "asc"),
    "name_desc": SortSpec(FIELD_NAME_EN, "desc"),
    "latin_asc": SortSpec(FIELD_NAME_LATIN, "asc"),
    "latin_desc": SortSpec(FIELD_NAME_LATIN, "desc"),
    "halq_asc": SortSpec(FIELD_NAME_HALQ, "asc"),
    "halq_desc": SortSpec(FIELD_NAME_HALQ, "desc"),
    "updated_asc": SortSpec(FIELD_UPDATED_AT, "asc"),
    "updated_desc": SortSpec(FIELD_UPDATED_AT, "desc"),
}


@dataclass(frozen=True, slots=True)
class PlantFilter:
    """Normalized filter, sort and pagination intent for one archive page.

    Instances are expected to come from `build_plant_filter`, which applies
    all trimming, lowercasing and clamping. Terms keep caller order.

    Attributes:
        search: Lowercased search text, or None for no text search.
        uses: Lowercased "uses" terms.
        origin: Lowercased origin terms.
        niche: Lowercased niche/zone terms.
        sort: Sort key from `SORT_OPTIONS` (unknown keys fall back later).
        page_size: Page size within [1, 100].
        cursor: Opaque backing-store cursor; empty for the first page.
    """

    search: str | None = None
    uses: tuple[str, ...] = ()
    origin: tuple[str, ...] = ()
    niche: tuple[str, ...] = ()
    sort: str = DEFAULT_SORT
    page_size: int = DEFAULT_PAGE_SIZE
    cursor: str = ""


def build_plant_filter(
    *,
    search: str | None = None,
    uses: Iterable[str] | str | None = None,
    origin: Iterable[str] | str | None = None,
    niche: Iterable[str] | str | None = None,
    sort: str | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    cursor: str | None = None,
) -> PlantFilter:
    """Build a normalized `PlantFilter` from raw user input.

    A single string for a term category is treated as a one-element list.
    """
    return PlantFilter(
        search=normalize_search(search),
        uses=normalize_terms(uses),
        origin=normalize_terms(origin),
        niche=normalize_terms(niche),
        sort=(sort or DEFAULT_SORT).strip(),
        page_size=clamp_page_size(page_size),
        cursor=cursor or "",
    )


def clamp_page_size(page_size: int) -> int:
    """Clamp a page size into [1, 100]."""
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, int(page_size)))


def normalize_search(search: str | None) -> str | None:
    """Truncate, trim and lowercase search text; empty text means no search."""
    if not search:
        return None
    text = search[:MAX_SEARCH_LENGTH].strip().lower()
    return text or None


def normalize_terms(terms: Iterable[str] | str | None) -> tuple[str, ...]:
    """Lowercase and trim terms, dropping empty ones while keeping order."""
    if terms is None:
        return ()
    if isinstance(terms, str):
        terms = [terms]
    out: list[str] = []
    for term in terms:
        value = str(term).lower().strip()
        if value:
            out.append(value)
    return tuple(out)


def resolve_sort(sort: str | None) -> SortSpec:
    """Resolve a sort key; unknown keys silently fall back to ``name_asc``."""
    return SORT_OPTIONS.get(sort or DEFAULT_SORT, SORT_OPTIONS[DEFAULT_SORT])
