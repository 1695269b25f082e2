"""Airtable filter formula compiler.

Compiles normalized filter terms into an Airtable ``filterByFormula``
expression.

Rules
- Each non-empty category becomes one OR-group with one
  ``SEARCH('<term>', LOWER({<field>}))`` predicate per term.
- Search text spans the English, Halq'eméylem and Latin name fields.
- Groups are emitted in the order search, uses, origin, niche and combined
  with an outer ``AND(...)``.
- No group at all means no formula (match every record).

Terms must already be lowercased and trimmed; literals are escaped here,
once, right before interpolation.
"""

from __future__ import annotations

from typing import Sequence

from PlantProxy.core.query import FIELD_NAME_EN, FIELD_NAME_HALQ, FIELD_NAME_LATIN, PlantFilter

SEARCH_FIELDS: tuple[str, ...] = (FIELD_NAME_EN, FIELD_NAME_HALQ, FIELD_NAME_LATIN)
USES_FIELD = "Uses (Food, medicine, other uses)"
ORIGIN_FIELD = "Indigenous or Introduced/Niche or Zone"
NICHE_FIELD = "Niche/Zone and Ecology"


def escape_formula_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted formula string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _search_predicate(literal: str, field: str) -> str:
    return f"SEARCH('{literal}', LOWER({{{field}}}))"


def _or_group(predicates: Sequence[str]) -> str:
    return "OR(" + ", ".join(predicates) + ")"


def _terms_group(terms: Sequence[str], field: str) -> str | None:
    if not terms:
        return None
    return _or_group([_search_predicate(escape_formula_literal(term), field) for term in terms])


def build_filter_formula(
    search: str | None = None,
    uses: Sequence[str] = (),
    origin: Sequence[str] = (),
    niche: Sequence[str] = (),
) -> str | None:
    """Build an Airtable filter formula.

    Args:
        search: Normalized search text, or None.
        uses: Normalized "uses" terms.
        origin: Normalized origin terms.
        niche: Normalized niche/zone terms.

    Returns:
        ``AND(...)`` formula, or None when nothing is filtered.
    """
    groups: list[str] = []

    if search:
        literal = escape_formula_literal(search)
        groups.append(_or_group([_search_predicate(literal, field) for field in SEARCH_FIELDS]))

    for terms, field in ((uses, USES_FIELD), (origin, ORIGIN_FIELD), (niche, NICHE_FIELD)):
        group = _terms_group(terms, field)
        if group:
            groups.append(group)

    if not groups:
        return None
    return "AND(" + ", ".join(groups) + ")"


def compile_plant_filter(plant_filter: PlantFilter) -> str | None:
    """Compile a `PlantFilter` into an Airtable filter formula."""
    return build_filter_formula(
        plant_filter.search,
        plant_filter.uses,
        plant_filter.origin,
        plant_filter.niche,
    )


def record_id_formula(record_id: str) -> str:
    """Build a formula matching exactly one record identifier."""
    return f"RECORD_ID()='{escape_formula_literal(record_id)}'"
