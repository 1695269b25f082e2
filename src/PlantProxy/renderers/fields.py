"""Single-field widgets.

Renders one display key of a normalized plant as text, list, date, link,
image or audio markup. ``auto`` picks a kind from the value and key name.
"""

from __future__ import annotations

import html
from datetime import datetime
from typing import Any, Mapping

from dateutil import parser as dt_parser

from PlantProxy.core.models import NormalizedPlant
from PlantProxy.renderers.html import escape_url
from PlantProxy.renderers.templates import (
    AUDIO_FIELD_TEMPLATE,
    DATE_FIELD_TEMPLATE,
    IMAGE_FIELD_TEMPLATE,
    LINK_FIELD_TEMPLATE,
    LIST_FIELD_TEMPLATE,
    TEXT_FIELD_TEMPLATE,
)
from PlantProxy.sources.airtable.mapper import normalize_attachments
from PlantProxy.utils.log import log

FIELD_KINDS = ("auto", "text", "list", "date", "link", "image", "audio")

_IMAGE_HINTS = ("image", "photo", "picture", "thumbnail")
_AUDIO_HINTS = ("audio", "sound", "pronunciation")
_DATE_HINTS = ("_at", "date", "updated", "created")


def guess_field_kind(key: str, value: Any) -> str:
    """Guess how a field value should be displayed.

    Args:
        key: Display key.
        value: Normalized field value.

    Returns:
        One of the concrete kinds in `FIELD_KINDS` (never ``auto``).
    """
    lowered = key.lower()
    attachments = normalize_attachments(value)
    if attachments or (isinstance(value, str) and _is_http_url(value)):
        mime = (attachments[0].type or "") if attachments else ""
        if mime.startswith("image/") or any(hint in lowered for hint in _IMAGE_HINTS):
            return "image"
        if mime.startswith("audio/") or any(hint in lowered for hint in _AUDIO_HINTS):
            return "audio"
        return "link"
    if isinstance(value, (list, tuple)):
        return "list"
    if isinstance(value, str) and any(hint in lowered for hint in _DATE_HINTS) and _parse_date(value):
        return "date"
    return "text"


def render_field(plant: NormalizedPlant, key: str, *, kind: str = "auto", default: str = "") -> str:
    """Render one field of a plant.

    Missing keys, empty values and values that do not fit the requested kind
    render the escaped ``default`` instead of failing.

    Args:
        plant: Normalized plant mapping.
        key: Display key to render.
        kind: Widget kind from `FIELD_KINDS`.
        default: Fallback text.

    Returns:
        HTML fragment.
    """
    if kind not in FIELD_KINDS:
        raise ValueError(f"Unknown field kind: {kind}")
    if key not in plant:
        log.warning("Unknown plant field: %s", key)
        return html.escape(default)

    value = plant[key]
    if _is_empty(value):
        return html.escape(default)

    resolved = guess_field_kind(key, value) if kind == "auto" else kind
    safe_key = html.escape(key, quote=True)

    if resolved in ("image", "audio", "link"):
        return _render_media(resolved, safe_key, value, plant, default)
    if resolved == "list":
        items = [_display_text(item) for item in _as_list(value)]
        items = [item for item in items if item]
        if not items:
            return html.escape(default)
        rendered = "".join(f"<li>{html.escape(item)}</li>" for item in items)
        return LIST_FIELD_TEMPLATE.format(key=safe_key, items=rendered)
    if resolved == "date":
        parsed = _parse_date(_display_text(value))
        if parsed is None:
            return html.escape(default)
        return DATE_FIELD_TEMPLATE.format(
            key=safe_key,
            iso=html.escape(parsed.isoformat(), quote=True),
            value=html.escape(parsed.strftime("%Y-%m-%d")),
        )

    text = _display_text(value)
    if not text:
        return html.escape(default)
    return TEXT_FIELD_TEMPLATE.format(key=safe_key, value=html.escape(text))


def _render_media(kind: str, safe_key: str, value: Any, plant: Mapping[str, Any], default: str) -> str:
    attachments = normalize_attachments(value)
    if attachments:
        url, mime, label = attachments[0].url, attachments[0].type, attachments[0].filename
    elif isinstance(value, str):
        url, mime, label = value, None, None
    else:
        url, mime, label = "", None, None

    safe_url = escape_url(url)
    if not safe_url:
        return html.escape(default)
    if kind == "image":
        alt = _display_text(plant.get("name_en")) or label or ""
        return IMAGE_FIELD_TEMPLATE.format(key=safe_key, url=safe_url, alt=html.escape(alt, quote=True))
    if kind == "audio":
        return AUDIO_FIELD_TEMPLATE.format(
            key=safe_key,
            url=safe_url,
            mime=html.escape(mime or "audio/mpeg", quote=True),
        )
    return LINK_FIELD_TEMPLATE.format(key=safe_key, url=safe_url, value=html.escape(label or url))


def _display_text(value: Any) -> str:
    """Convert a scalar-ish field value to display text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        # Collaborator and linked-record cells carry a display name.
        for name in ("name", "text", "filename", "url"):
            text = value.get(name)
            if isinstance(text, str) and text.strip():
                return text.strip()
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(text for text in (_display_text(item) for item in value) if text)
    return str(value)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def _is_http_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def _parse_date(raw_value: str) -> datetime | None:
    """Parse ISO date/datetime text."""
    if not raw_value:
        return None
    try:
        return dt_parser.isoparse(raw_value)
    except (TypeError, ValueError):
        return None
