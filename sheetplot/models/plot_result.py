from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from datetime import datetime

from .mapping import ColumnMapping
from .point import Point
from .row_data import Row
from .style import StyleConfig

"""Processing result models for SheetPlot.

PlotResult is the outcome of loading and resolving one tabular source.
RunResult aggregates the per-source statistics for the SUMMARY line.
"""

__all__ = [
    "PlotResult",
    "SourceStat",
    "RunResult",
]


@dataclass(frozen=True)
class PlotResult:
    """Outcome of one source: the loaded table, its mapping and plotted points."""
    source: str
    headers: list[str]
    rows: list[Row]
    mapping: ColumnMapping | None
    points: list[Point]
    style: StyleConfig = field(default_factory=StyleConfig)
    insights: str | None = None  # advisory text from the inference service
    mapping_origin: str = "heuristic"  # "hint" | "heuristic" | "override"
    elapsed_seconds: float = 0.0

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def plotted_rows(self) -> int:
        return len(self.points)

    @property
    def dropped_rows(self) -> int:
        return len(self.rows) - len(self.points)


@dataclass(frozen=True)
class SourceStat:
    """Per-source statistics (one line per processed source)."""
    source: str
    status: str  # ok/failed
    total_rows: int
    plotted_rows: int
    elapsed_seconds: float
    error: str | None = None
    output_path: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of one CLI run across all sources."""
    ok_sources: int
    failed_sources: int
    total_rows: int
    plotted_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    source_stats: list[SourceStat] | None = None
    results: list[PlotResult] | None = None

    @property
    def dropped_rows(self) -> int:
        return self.total_rows - self.plotted_rows

    @property
    def median_source_seconds(self) -> float:
        """Median per-source processing time (0.0 when nothing ran)."""
        if not self.source_stats:
            return 0.0
        return statistics.median(s.elapsed_seconds for s in self.source_stats)
