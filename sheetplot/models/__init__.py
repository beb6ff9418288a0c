"""Domain models for the SheetPlot pipeline.

This package contains the value objects passed between the pipeline stages:
column mappings, validated points, style rules, cluster aggregates and the
per-source processing results.
"""

from .cluster import ClusterAggregate
from .mapping import ColumnMapping
from .plot_result import PlotResult, RunResult, SourceStat
from .point import Point, RejectedRow, RejectReason
from .row_data import Row, cell_text
from .style import StyleConfig, StyleRule

__all__ = [
    # Input rows
    "Row",
    "cell_text",
    # Mapping / points
    "ColumnMapping",
    "Point",
    "RejectedRow",
    "RejectReason",
    # Rendering inputs
    "StyleConfig",
    "StyleRule",
    "ClusterAggregate",
    # Processing results
    "PlotResult",
    "RunResult",
    "SourceStat",
]
