from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..models.point import Point
from ..models.row_data import cell_text
from ..models.style import StyleConfig, StyleRule

"""Categorical style assigner.

Colors are handed out by first-occurrence order of each distinct value, cycling
through the palette when there are more values than colors (two categories may
then share a color).
"""

__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_PALETTE",
    "apply_style",
    "assign_style",
    "marker_color",
]

DEFAULT_PALETTE: tuple[str, ...] = (
    "#ef4444", "#3b82f6", "#10b981", "#f59e0b", "#8b5cf6",
    "#ec4899", "#06b6d4", "#f97316", "#6366f1", "#14b8a6",
)
DEFAULT_COLOR = "#4f46e5"


def assign_style(
    rows: Iterable[Mapping[str, Any]], column: str, palette: Sequence[str] = DEFAULT_PALETTE
) -> StyleRule:
    """Build a StyleRule for ``column``.

    The n-th distinct stringified value receives ``palette[n % len(palette)]``.
    Missing cells stringify to "" and form their own category.

    Raises:
        ValueError: If the palette is empty
    """
    if not palette:
        raise ValueError("palette must contain at least one color")
    color_map: dict[str, str] = {}
    for row in rows:
        value = cell_text(row.get(column))
        if value not in color_map:
            color_map[value] = palette[len(color_map) % len(palette)]
    return StyleRule(column=column, color_map=color_map)


def apply_style(
    rows: Iterable[Mapping[str, Any]], column: str | None, palette: Sequence[str] = DEFAULT_PALETTE
) -> StyleConfig:
    """Select a styling column. An empty or None column clears the active rule."""
    if not column:
        return StyleConfig()
    return StyleConfig(active_column=column, rule=assign_style(rows, column, palette))


def marker_color(point: Point, style: StyleConfig | None, default_color: str = DEFAULT_COLOR) -> str:
    if style is None or style.rule is None or not style.active_column:
        return default_color
    value = cell_text(point.source_row.get(style.active_column))
    return style.rule.color_for(value) or default_color
