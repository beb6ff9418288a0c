from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Literal

from ..models.mapping import ColumnMapping
from ..models.point import Point, RejectedRow, RejectReason
from ..models.row_data import cell_text
from .parser import parse_coordinate

"""Row-to-point resolver.

Converts each row into at most one validated Point using a ColumnMapping.
Dirty rows are dropped silently; :func:`classify_row` exposes the reason for
callers that want to report it (the CLI reject log), but :func:`resolve_points`
only ever returns points.

All functions here are pure: no I/O, no mutation of the rows or the mapping.
"""

__all__ = [
    "LAT_RANGE",
    "LNG_RANGE",
    "classify_row",
    "is_valid_position",
    "rejected_rows",
    "resolve_points",
    "swap_mapping",
    "update_mapping",
]

LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)

_COMBINED_DELIMITER = re.compile(r"[,;]")


def is_valid_position(lat: float, lng: float) -> bool:
    """Range check plus the origin sentinel: (0, 0) is treated as missing data."""
    if not (LAT_RANGE[0] <= lat <= LAT_RANGE[1] and LNG_RANGE[0] <= lng <= LNG_RANGE[1]):
        return False
    return lat != 0 or lng != 0


def _split_combined(text: str) -> tuple[str, str] | None:
    parts = _COMBINED_DELIMITER.split(text)
    if len(parts) < 2:
        return None
    # Extra parts ("40.7,-74.0,extra") are ignored
    return parts[0], parts[1]


def classify_row(
    row: Mapping[str, Any], mapping: ColumnMapping | None, index: int = 0
) -> Point | RejectedRow:
    """Resolve a single row, returning the Point or the reason it was dropped."""
    if mapping is None or not mapping.is_complete:
        return RejectedRow(index, RejectReason.NO_MAPPING, "", "")

    if mapping.is_combined:
        combined = cell_text(row.get(mapping.lat_column))
        split = _split_combined(combined)
        if split is None:
            return RejectedRow(index, RejectReason.MALFORMED_COMBINED, combined, combined)
        lat_raw, lng_raw = split
    else:
        lat_raw = cell_text(row.get(mapping.lat_column))
        lng_raw = cell_text(row.get(mapping.lng_column))

    lat = parse_coordinate(lat_raw)
    if lat is None:
        return RejectedRow(index, RejectReason.UNPARSEABLE_LAT, lat_raw, lng_raw)
    lng = parse_coordinate(lng_raw)
    if lng is None:
        return RejectedRow(index, RejectReason.UNPARSEABLE_LNG, lat_raw, lng_raw)

    if lat == 0 and lng == 0:
        return RejectedRow(index, RejectReason.ORIGIN_SENTINEL, lat_raw, lng_raw)
    if not is_valid_position(lat, lng):
        return RejectedRow(index, RejectReason.OUT_OF_RANGE, lat_raw, lng_raw)

    return Point(lat=lat, lng=lng, source_row=row)


def resolve_points(rows: Iterable[Mapping[str, Any]], mapping: ColumnMapping | None) -> list[Point]:
    """Resolve every row, keeping input order and skipping rows without a valid point.

    An absent or incomplete mapping is an inert state and yields ``[]``.
    """
    if mapping is None or not mapping.is_complete:
        return []
    points: list[Point] = []
    for i, row in enumerate(rows):
        outcome = classify_row(row, mapping, i)
        if isinstance(outcome, Point):
            points.append(outcome)
    return points


def rejected_rows(rows: Sequence[Mapping[str, Any]], mapping: ColumnMapping | None) -> list[RejectedRow]:
    """Diagnostic counterpart of :func:`resolve_points`: the rows it drops, with reasons."""
    out: list[RejectedRow] = []
    for i, row in enumerate(rows):
        outcome = classify_row(row, mapping, i)
        if isinstance(outcome, RejectedRow):
            out.append(outcome)
    return out


def update_mapping(
    mapping: ColumnMapping | None, axis: Literal["lat", "lng"], column: str
) -> ColumnMapping:
    """Return a new mapping with one axis reassigned.

    Starting from no mapping gives empty names for the untouched axis, which
    keeps the mapping inert until both sides are chosen.
    """
    base = mapping or ColumnMapping(lat_column="", lng_column="")
    if axis == "lat":
        return ColumnMapping(lat_column=column, lng_column=base.lng_column)
    if axis == "lng":
        return ColumnMapping(lat_column=base.lat_column, lng_column=column)
    raise ValueError(f"unknown axis: {axis!r}")


def swap_mapping(mapping: ColumnMapping | None) -> ColumnMapping | None:
    if mapping is None:
        return None
    return ColumnMapping(lat_column=mapping.lng_column, lng_column=mapping.lat_column)
