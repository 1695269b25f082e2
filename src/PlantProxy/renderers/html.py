"""HTML renderers for the plant archive grid."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Mapping, Sequence
from urllib.parse import urlencode, urlparse

from PlantProxy.core.models import Page, PlantCard
from PlantProxy.core.trail import (
    TRAIL_PARAM,
    is_first_page,
    next_trail,
    previous_trail,
    trail_query_params,
)
from PlantProxy.renderers.template_renderer import TemplateRenderer
from PlantProxy.renderers.templates import (
    ARCHIVE_TEMPLATE,
    CARD_BODY_TEMPLATE,
    CARD_TEMPLATE,
    EMPTY_TEMPLATE,
    ERROR_TEMPLATE,
    NEXT_LINK_TEMPLATE,
    PREVIOUS_LINK_TEMPLATE,
)
from PlantProxy.utils.log import log

QueryParams = Mapping[str, str | Sequence[str]]

_PAGINATION_PARAMS = frozenset({TRAIL_PARAM, "cursor"})


@dataclass(slots=True)
class ArchiveRenderer:
    """Render archive pages into HTML fragments."""

    template_renderer: TemplateRenderer = field(default_factory=TemplateRenderer)

    def render_archive(
        self,
        page: Page,
        trail: Sequence[str],
        *,
        base_url: str = "",
        params: QueryParams | None = None,
    ) -> str:
        """Render the card grid and pagination links.

        Args:
            page: Fetched archive page.
            trail: Cursor trail of the current page.
            base_url: Page URL the pagination links point to.
            params: Current filter parameters to carry into links.

        Returns:
            HTML fragment; an empty-state block when the page has no cards.
        """
        if not page.plants:
            return EMPTY_TEMPLATE

        cards = "\n".join(self.render_card(card) for card in page.plants)
        pagination = self.render_pagination(page, trail, base_url=base_url, params=params or {})
        return self.template_renderer.render(
            ARCHIVE_TEMPLATE,
            {"count": str(page.count), "cards": cards, "pagination": pagination},
        )

    def render_card(self, card: PlantCard) -> str:
        """Render one plant card."""
        image_url = escape_url(card.feature_image or "")
        context = {
            "feature_image": image_url,
            "alt": html.escape(card.name_en or card.name_latin or "Plant image", quote=True),
            "image_placeholder": "" if image_url else "No Image",
            "name_en": html.escape(card.name_en or ""),
            "name_latin": html.escape(card.name_latin or ""),
            "name_halq": html.escape(card.name_halq or ""),
            "soundbite": escape_url(card.soundbite or ""),
        }
        body = self.template_renderer.render_conditional(CARD_BODY_TEMPLATE, context)
        return self.template_renderer.render(
            CARD_TEMPLATE,
            {"id": html.escape(card.id, quote=True), "body": body},
        )

    def render_pagination(
        self,
        page: Page,
        trail: Sequence[str],
        *,
        base_url: str,
        params: QueryParams,
    ) -> str:
        """Render Previous/Next links for the current trail."""
        links: list[str] = []
        if not is_first_page(trail):
            url = build_page_url(base_url, params, trail_query_params(previous_trail(trail)))
            links.append(PREVIOUS_LINK_TEMPLATE.format(url=html.escape(url, quote=True)))
        if page.next_cursor:
            url = build_page_url(base_url, params, trail_query_params(next_trail(trail, page.next_cursor)))
            links.append(NEXT_LINK_TEMPLATE.format(url=html.escape(url, quote=True)))
        return "".join(links)


def render_error(message: str) -> str:
    """Render a visible, escaped error block."""
    return ERROR_TEMPLATE.format(message=html.escape(message))


def build_page_url(base_url: str, params: QueryParams, pagination: Mapping[str, str]) -> str:
    """Build a pagination URL keeping filters and replacing pagination tokens.

    Old ``cursor``/``trail`` parameters are dropped; empty values are skipped.
    """
    query: list[tuple[str, str]] = []
    for key, value in params.items():
        if key in _PAGINATION_PARAMS:
            continue
        values = [value] if isinstance(value, str) else list(value)
        query.extend((key, item) for item in values if item)
    query.extend(pagination.items())

    encoded = urlencode(query)
    if not encoded:
        return base_url or "?"
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}{encoded}"


def escape_url(url: str) -> str:
    """Validate and escape URLs used in HTML attributes.

    Args:
        url: Raw URL.

    Returns:
        Escaped URL when it uses http(s), or an empty string.
    """
    if not url:
        return ""

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        log.warning("Disallowed URL scheme: %s (URL: %s)", parsed.scheme, url)
        return ""
    return html.escape(url, quote=True)
