"""Cursor trail codec for backward/forward archive navigation.

The backing store only hands out forward continuation cursors. To support a
"Previous" link without server-side session state, the cursors visited so far
are carried in the page URL as a comma-joined ``trail`` parameter.

Rules
- Page 1 has no cursor. It is represented by the sentinel trail ``("",)`` and
  the empty string is never stored next to real cursors.
- The last element of a trail is the cursor used to fetch the current page.
- "Next" appends the cursor returned by the backing store.
- "Previous" drops the last element; dropping the only cursor returns to
  page 1.
- Page 1 links omit the ``trail`` parameter entirely.
"""

from __future__ import annotations

from typing import Iterable, Sequence

CursorTrail = tuple[str, ...]

FIRST_PAGE: CursorTrail = ("",)
TRAIL_PARAM = "trail"
_SEPARATOR = ","


def decode_trail(serialized: str | None) -> CursorTrail:
    """Decode a serialized trail, dropping empty elements."""
    if not serialized:
        return FIRST_PAGE
    cursors = tuple(part for part in serialized.split(_SEPARATOR) if part)
    return cursors or FIRST_PAGE


def encode_trail(trail: Iterable[str]) -> str:
    """Encode a trail as a comma-joined string of non-sentinel cursors."""
    return _SEPARATOR.join(cursor for cursor in trail if cursor)


def current_cursor(trail: Sequence[str]) -> str:
    """Return the cursor for the current page (empty on page 1)."""
    return trail[-1] if trail else ""


def has_previous(trail: Sequence[str]) -> bool:
    """Return True when an earlier stored cursor exists."""
    return len(trail) > 1


def is_first_page(trail: Sequence[str]) -> bool:
    """Return True when the trail points at page 1."""
    return current_cursor(trail) == ""


def previous_trail(trail: Sequence[str]) -> CursorTrail:
    """Return the trail of the previous page."""
    remaining = tuple(cursor for cursor in trail[:-1] if cursor)
    return remaining or FIRST_PAGE


def next_trail(trail: Sequence[str], cursor: str) -> CursorTrail:
    """Return the trail of the next page reached through ``cursor``."""
    stored = tuple(item for item in trail if item)
    return stored + (cursor,)


def trail_query_params(trail: Sequence[str]) -> dict[str, str]:
    """Return the ``trail`` URL parameter for a page, empty for page 1."""
    encoded = encode_trail(trail)
    if not encoded:
        return {}
    return {TRAIL_PARAM: encoded}
