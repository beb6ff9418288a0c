from __future__ import annotations

from collections.abc import Sequence

from ..models.mapping import ColumnMapping

"""Column mapping resolver.

Two stages, each usable on its own:

1. :func:`validate_hint` - an external hint is accepted only when both of its
   column names exist in the header list.
2. :func:`heuristic_mapping` - deterministic header-name scan with a positional
   fallback (first header for latitude, second for longitude).

The result is structurally present but not guaranteed semantically correct;
users can still reassign or swap the columns afterwards.
"""

__all__ = [
    "COMBINED_HEADER_NAMES",
    "heuristic_mapping",
    "resolve_mapping",
    "resolve_mapping_with_origin",
    "validate_hint",
]

COMBINED_HEADER_NAMES = frozenset({"coordinates", "coords"})
_LAT_TOKENS = ("lat", "y")
_LNG_TOKENS = ("lng", "long", "x")


def validate_hint(headers: Sequence[str], hint: ColumnMapping | None) -> ColumnMapping | None:
    """Return the hint unchanged if both names are real headers, else None."""
    if hint is None:
        return None
    known = set(headers)
    if hint.lat_column in known and hint.lng_column in known:
        return hint
    return None


def _find_header(headers: Sequence[str], tokens: tuple[str, ...]) -> str | None:
    for h in headers:
        lowered = h.lower()
        if any(t in lowered for t in tokens) or lowered in COMBINED_HEADER_NAMES:
            return h
    return None


def heuristic_mapping(headers: Sequence[str]) -> ColumnMapping:
    """Guess the coordinate columns from header names alone.

    Substring matches are case-insensitive and deliberately loose: "City"
    contains "y" and is picked as the latitude column ahead of a later "Y".
    Sides with no match fall back to headers[0] / headers[1]; when the header
    list is too short the missing side is "" (an inert mapping).
    """
    lat = _find_header(headers, _LAT_TOKENS)
    lng = _find_header(headers, _LNG_TOKENS)
    if lat is None:
        lat = headers[0] if len(headers) > 0 else ""
    if lng is None:
        lng = headers[1] if len(headers) > 1 else ""
    return ColumnMapping(lat_column=lat, lng_column=lng)


def resolve_mapping_with_origin(
    headers: Sequence[str], hint: ColumnMapping | None = None
) -> tuple[ColumnMapping, str]:
    """Like :func:`resolve_mapping`, also naming the stage that produced it ("hint" or "heuristic")."""
    validated = validate_hint(headers, hint)
    if validated is not None:
        return validated, "hint"
    return heuristic_mapping(headers), "heuristic"


def resolve_mapping(headers: Sequence[str], hint: ColumnMapping | None = None) -> ColumnMapping:
    """Validated hint first, heuristic otherwise."""
    return resolve_mapping_with_origin(headers, hint)[0]
