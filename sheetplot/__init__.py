"""SheetPlot: turn loosely-typed spreadsheet rows into validated map points.

The public surface re-exports the pure pipeline stages so callers (a web shell,
a notebook, the CLI) can run them without touching the service layer.
"""

from .cluster.aggregate import aggregate_cluster, format_display_value
from .geo.parser import parse_coordinate
from .geo.points import resolve_points, swap_mapping, update_mapping
from .mapping.resolver import resolve_mapping
from .models import ColumnMapping, Point, StyleConfig, StyleRule
from .style.assigner import DEFAULT_PALETTE, assign_style

__all__ = [
    "ColumnMapping",
    "DEFAULT_PALETTE",
    "Point",
    "StyleConfig",
    "StyleRule",
    "aggregate_cluster",
    "assign_style",
    "format_display_value",
    "parse_coordinate",
    "resolve_mapping",
    "resolve_points",
    "swap_mapping",
    "update_mapping",
]

__version__ = "0.1.0"
