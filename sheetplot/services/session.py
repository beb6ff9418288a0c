from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from ..cluster.aggregate import DEFAULT_HIGHLIGHT_FIELD, aggregate_cluster, format_display_value
from ..geo.points import resolve_points, swap_mapping, update_mapping
from ..models.mapping import ColumnMapping
from ..models.point import Point
from ..models.row_data import Row
from ..models.style import StyleConfig
from ..style.assigner import DEFAULT_COLOR, DEFAULT_PALETTE, apply_style, marker_color

"""Interactive state for one loaded dataset.

Holds the rows already fetched plus the user's current mapping and styling
choices. Every edit recomputes the affected output from scratch over the
loaded rows; nothing is re-fetched and no result is patched incrementally.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "PlotSession",
]


@dataclass
class PlotSession:
    headers: list[str]
    rows: list[Row]
    mapping: ColumnMapping | None = None
    palette: Sequence[str] = DEFAULT_PALETTE
    default_color: str = DEFAULT_COLOR
    highlight_field: str = DEFAULT_HIGHLIGHT_FIELD
    style: StyleConfig = field(default_factory=StyleConfig)
    points: list[Point] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._refresh_points()

    def _refresh_points(self) -> None:
        self.points = resolve_points(self.rows, self.mapping)
        logger.debug(
            f"resolved {len(self.points)}/{len(self.rows)} rows "
            f"(dropped={len(self.rows) - len(self.points)})"
        )

    def set_mapping(self, mapping: ColumnMapping | None) -> list[Point]:
        self.mapping = mapping
        self._refresh_points()
        return self.points

    def set_mapping_column(self, axis: Literal["lat", "lng"], column: str) -> list[Point]:
        """Reassign one axis (choose the same column for both to use a combined cell)."""
        return self.set_mapping(update_mapping(self.mapping, axis, column))

    def swap(self) -> list[Point]:
        return self.set_mapping(swap_mapping(self.mapping))

    def apply_style(self, column: str | None) -> StyleConfig:
        """Color markers by ``column``; an empty column clears styling."""
        self.style = apply_style(self.rows, column, self.palette)
        return self.style

    def clear_style(self) -> StyleConfig:
        return self.apply_style(None)

    def color_of(self, point: Point) -> str:
        return marker_color(point, self.style, self.default_color)

    def cluster_label(self, members: Iterable[Point]) -> str:
        """Glyph text for a cluster the map widget formed from ``members``."""
        return format_display_value(aggregate_cluster(members, self.highlight_field))

    @property
    def plotted_rows(self) -> int:
        return len(self.points)

    @property
    def dropped_rows(self) -> int:
        return len(self.rows) - len(self.points)
