from __future__ import annotations

import json
import re
from collections.abc import Collection, Iterable
from pathlib import Path
from typing import Any

from ..cluster.aggregate import DEFAULT_HIGHLIGHT_FIELD, marker_label
from ..models.plot_result import PlotResult
from ..models.point import Point
from ..models.row_data import cell_text
from ..models.style import StyleConfig
from ..style.assigner import DEFAULT_COLOR, marker_color

"""GeoJSON export for the map renderer.

Each point becomes a Feature whose properties carry the source row (as text),
the marker color and the highlight label. Coordinates follow GeoJSON order:
``[lng, lat]``.
"""

__all__ = [
    "output_name",
    "points_to_geojson",
    "unique_output_name",
    "write_geojson",
]

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]+")
_SHEET_ID = re.compile(r"/spreadsheets/d/([A-Za-z0-9_-]+)")


def points_to_geojson(
    points: Iterable[Point],
    style: StyleConfig | None = None,
    highlight_field: str = DEFAULT_HIGHLIGHT_FIELD,
    default_color: str = DEFAULT_COLOR,
) -> dict[str, Any]:
    features = []
    for p in points:
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [p.lng, p.lat]},
                "properties": {
                    "row": {k: cell_text(v) for k, v in p.source_row.items()},
                    "marker-color": marker_color(p, style, default_color),
                    "label": marker_label(p, highlight_field),
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}


def output_name(source: str) -> str:
    """File name for a source's GeoJSON (path stem or URL tail, sanitized)."""
    sheet = _SHEET_ID.search(source)
    if sheet is not None:
        return _UNSAFE.sub("_", sheet.group(1)) + ".geojson"
    tail = source.rstrip("/").split("?")[0].split("/")[-1] or "source"
    stem = Path(tail).stem or tail
    return _UNSAFE.sub("_", stem) + ".geojson"


def unique_output_name(source: str, taken: Collection[str]) -> str:
    """:func:`output_name`, numbered (``-2``, ``-3``...) past names already in ``taken``."""
    name = output_name(source)
    if name not in taken:
        return name
    stem = name[: -len(".geojson")]
    n = 2
    while f"{stem}-{n}.geojson" in taken:
        n += 1
    return f"{stem}-{n}.geojson"


def write_geojson(
    result: PlotResult,
    out_dir: Path,
    *,
    highlight_field: str = DEFAULT_HIGHLIGHT_FIELD,
    default_color: str = DEFAULT_COLOR,
    theme: str = "light",
    filename: str | None = None,
) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    doc = points_to_geojson(result.points, result.style, highlight_field, default_color)
    doc["metadata"] = {
        "source": result.source,
        "mapping": result.mapping.to_dict() if result.mapping else None,
        "mapping_origin": result.mapping_origin,
        "style_column": result.style.active_column,
        "theme": theme,
        "total_rows": result.total_rows,
        "plotted_rows": result.plotted_rows,
        "insights": result.insights,
    }
    path = out_dir / (filename or output_name(result.source))
    path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
