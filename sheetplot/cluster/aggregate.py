from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..models.cluster import ClusterAggregate
from ..models.point import Point
from ..models.row_data import cell_text

"""Cluster aggregator.

Grouping itself belongs to the map widget (zoom / pixel proximity). Given the
members of one cluster, this module computes the number drawn on its glyph:
the sum of the members' numeric highlight values when at least one member has
one, otherwise the member count.
"""

__all__ = [
    "DEFAULT_HIGHLIGHT_FIELD",
    "aggregate_cluster",
    "format_display_value",
    "highlight_key",
    "highlight_number",
    "marker_label",
]

DEFAULT_HIGHLIGHT_FIELD = "latento"

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")


def highlight_key(row: Mapping[str, Any], field: str) -> str | None:
    """First column whose name equals ``field`` case-insensitively."""
    wanted = field.lower()
    for key in row:
        if key.lower() == wanted:
            return key
    return None


def marker_label(point: Point, field: str = DEFAULT_HIGHLIGHT_FIELD) -> str:
    """Text shown on an individual marker ("" when the row has no highlight column)."""
    key = highlight_key(point.source_row, field)
    if key is None:
        return ""
    return cell_text(point.source_row[key])


def highlight_number(text: str) -> float | None:
    """Numeric part of a highlight value: "10kg" -> 10.0, "bad" -> None."""
    if text == "":
        return None
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", text))
    if match is None:
        return None
    return float(match.group(0))


def aggregate_cluster(points: Iterable[Point], field: str = DEFAULT_HIGHLIGHT_FIELD) -> ClusterAggregate:
    total = 0.0
    numeric = 0
    count = 0
    for point in points:
        count += 1
        value = highlight_number(marker_label(point, field))
        if value is not None:
            total += value
            numeric += 1
    if numeric:
        return ClusterAggregate(value=total, is_sum=True, point_count=count, numeric_members=numeric)
    return ClusterAggregate(value=float(count), is_sum=False, point_count=count)


def format_display_value(aggregate: ClusterAggregate) -> str:
    """Glyph text: integers without decimals, other sums rounded to one decimal.

    Overflowing sums render as "inf" / "nan".
    """
    if not aggregate.is_sum:
        return str(aggregate.point_count)
    value = aggregate.value
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return f"{value:.1f}"
