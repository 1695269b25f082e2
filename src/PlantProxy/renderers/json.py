"""JSON renderers for pages and single plants."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from PlantProxy.core.models import NormalizedPlant, Page


def page_payload(page: Page) -> dict[str, Any]:
    """Render a page into a JSON-serializable mapping."""
    return {
        "success": True,
        "plants": [asdict(card) for card in page.plants],
        "next_cursor": page.next_cursor,
        "has_more": page.has_more,
        "count": page.count,
    }


def render_json(payload: Page | NormalizedPlant) -> str:
    """Serialize a page or a normalized plant as indented JSON."""
    data = page_payload(payload) if isinstance(payload, Page) else payload
    return json.dumps(data, ensure_ascii=False, indent=2)
