"""Command implementations for PlantProxy CLI.

Encapsulates the per-invocation logic of each command, separated from CLI
parameter handling and component wiring.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Sequence

from PlantProxy.cache import CachedPlantResolver
from PlantProxy.cache.lookup import LookupMemo
from PlantProxy.core.errors import PlantProxyError
from PlantProxy.core.query import DEFAULT_PAGE_SIZE, build_plant_filter
from PlantProxy.core.trail import current_cursor, decode_trail
from PlantProxy.renderers import ArchiveRenderer, render_error, render_field, render_json
from PlantProxy.services.plants import PlantQueryService
from PlantProxy.utils.log import log


@dataclass(frozen=True, slots=True)
class ArchiveRequest:
    """Archive parameters as received from the host page.

    Attributes:
        search: Raw search text.
        uses: Raw "uses" selections.
        origin: Raw origin selections.
        niche: Raw niche/zone selections.
        sort: Raw sort key.
        page_size: Requested page size (clamped later).
        trail: Serialized cursor trail, or None on page 1.
    """

    search: str | None = None
    uses: Sequence[str] = ()
    origin: Sequence[str] = ()
    niche: Sequence[str] = ()
    sort: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    trail: str | None = None

    def link_params(self) -> dict[str, str | list[str]]:
        """Return the filter parameters carried into pagination links."""
        params: dict[str, str | list[str]] = {}
        if self.search:
            params["search"] = self.search
        for name, values in (("uses", self.uses), ("origin", self.origin), ("niche", self.niche)):
            if values:
                params[name] = list(values)
        if self.sort:
            params["sort"] = self.sort
        return params


@dataclass(slots=True)
class ArchiveCommand:
    """Render one archive page.

    Fetch failures are rendered as a visible error block rather than an
    empty grid.
    """

    query_service: PlantQueryService
    renderer: ArchiveRenderer
    base_url: str = ""

    def execute(self, request: ArchiveRequest, *, output_format: str = "html") -> str:
        trail = decode_trail(request.trail)
        plant_filter = build_plant_filter(
            search=request.search,
            uses=request.uses,
            origin=request.origin,
            niche=request.niche,
            sort=request.sort,
            page_size=request.page_size,
            cursor=current_cursor(trail),
        )
        log.debug("Archive filter=%s trail=%s", plant_filter, trail)

        if output_format == "json":
            return render_json(self.query_service.fetch_page(plant_filter))

        try:
            page = self.query_service.fetch_page(plant_filter)
        except PlantProxyError as e:
            log.error("Archive fetch failed: %s", e)
            return render_error(str(e))

        return self.renderer.render_archive(
            page,
            trail,
            base_url=self.base_url,
            params=request.link_params(),
        )


@dataclass(slots=True)
class PlantCommand:
    """Resolve one plant and render it as JSON."""

    resolver: CachedPlantResolver
    memo: LookupMemo = field(default_factory=dict)

    def execute(self, plant_id: str, *, attachment_mode: str = "url") -> str:
        plant = self.resolver.get_by_id(plant_id, attachment_mode, memo=self.memo)
        return render_json(plant)


@dataclass(slots=True)
class FieldCommand:
    """Render field widgets of one plant.

    Lookups share one memo, so several fields of the same plant cost a
    single fetch. Lookup failures degrade to the default value.
    """

    resolver: CachedPlantResolver
    memo: LookupMemo = field(default_factory=dict)

    def execute(
        self,
        plant_id: str,
        fields: Sequence[str],
        *,
        kind: str = "auto",
        default: str = "",
    ) -> list[str]:
        try:
            plant = self.resolver.get_by_id(plant_id, "object", memo=self.memo)
        except PlantProxyError as e:
            log.warning("Field lookup failed: id=%s kind=%s error=%s", plant_id, e.kind, e)
            return [html.escape(default) for _ in fields]

        return [render_field(plant, name, kind=kind, default=default) for name in fields]
