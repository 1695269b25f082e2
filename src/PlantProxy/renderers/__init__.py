"""Output renderers for archive pages and plant fields.

Provides HTML fragments (archive grid, pagination, field widgets, error
blocks) and JSON payloads.
"""

from __future__ import annotations

from PlantProxy.renderers.fields import FIELD_KINDS, guess_field_kind, render_field
from PlantProxy.renderers.html import ArchiveRenderer, build_page_url, escape_url, render_error
from PlantProxy.renderers.json import page_payload, render_json
from PlantProxy.renderers.template_renderer import TemplateRenderer

__all__ = [
    "ArchiveRenderer",
    "FIELD_KINDS",
    "TemplateRenderer",
    "build_page_url",
    "escape_url",
    "guess_field_kind",
    "page_payload",
    "render_error",
    "render_field",
    "render_json",
]
