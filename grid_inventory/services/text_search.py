"""Which equipment attributes each search type looks at, and how they match.

The SQL repository builds ``ILIKE``-equivalent predicates from
:func:`searched_attributes`; the in-memory repository calls :func:`matches`.
Both trim the query and treat ``%``/``_`` as literal characters.
"""

from __future__ import annotations

from typing import Any

from grid_inventory.schemas.search import SearchType

_ATTRIBUTES: dict[SearchType, tuple[str, ...]] = {
    SearchType.id: ("equipment_id",),
    SearchType.address: ("address", "location"),
    SearchType.all: ("equipment_id", "name", "type", "address", "location"),
}


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def searched_attributes(search_type: SearchType) -> tuple[str, ...]:
    """Attribute names compared for a text search (coordinates excluded)."""
    return _ATTRIBUTES.get(search_type, _ATTRIBUTES[SearchType.all])


def coordinate_terms(query: str) -> tuple[str, str]:
    """Split a coordinates query into (latitude term, longitude term).

    ``"40.75, -73.98"`` gives one term per axis; anything else is looked up
    in both axes.
    """
    parts = [p.strip() for p in query.split(",")]
    if len(parts) == 2:
        return parts[0], parts[1]
    return query, query


def _contains(value: Any, needle: str) -> bool:
    if value is None:
        return False
    return needle in str(value).lower()


def matches(row: Any, query: str, search_type: SearchType) -> bool:
    """Case-insensitive substring match of ``row`` against a normalized query."""

    if not query:
        return True
    if search_type is SearchType.coordinates:
        lat_term, lng_term = coordinate_terms(query)
        return _contains(row.latitude, lat_term) or _contains(row.longitude, lng_term)
    return any(_contains(getattr(row, attr), query) for attr in searched_attributes(search_type))


__all__ = ["coordinate_terms", "matches", "normalize_query", "searched_attributes"]
