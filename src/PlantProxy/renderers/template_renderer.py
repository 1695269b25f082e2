"""Placeholder templates for HTML fragments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from PlantProxy.utils.log import log


_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


@dataclass(slots=True)
class TemplateRenderer:
    """Fill ``{name}`` placeholders, optionally dropping lines with empty values.

    Context values must already be escaped for their position in the markup.
    """

    warned_placeholders: set[str] = field(default_factory=set)

    def render(self, template: str, context: Mapping[str, str]) -> str:
        """Replace every known placeholder; unknown ones are kept verbatim."""
        self._warn_unknown(_PLACEHOLDER_RE.findall(template), context)
        return template.format_map(_KeepMissing(context))

    def render_conditional(self, template: str, context: Mapping[str, str]) -> str:
        """Render a template line by line, omitting lines with an empty field.

        A line is dropped when any of its known placeholders maps to an empty
        string. Lines without placeholders are always kept.
        """
        kept: list[str] = []
        for line in template.splitlines():
            names = _PLACEHOLDER_RE.findall(line)
            if not names:
                kept.append(line)
                continue
            self._warn_unknown(names, context)
            if any(name in context and not context[name] for name in names):
                continue
            kept.append(line.format_map(_KeepMissing(context)))
        return "\n".join(kept)

    def _warn_unknown(self, names: Iterable[str], context: Mapping[str, str]) -> None:
        for name in names:
            if name in context or name in self.warned_placeholders:
                continue
            self.warned_placeholders.add(name)
            log.warning("Unknown template placeholder: %s", name)


class _KeepMissing(dict[str, str]):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"
