from __future__ import annotations

import math
from datetime import UTC, datetime

from sheetplot.models import (
    ColumnMapping,
    PlotResult,
    Point,
    RunResult,
    SourceStat,
    StyleConfig,
    StyleRule,
    cell_text,
)


def test_cell_text_coercion():
    assert cell_text(None) == ""
    assert cell_text(math.nan) == ""
    assert cell_text(5.0) == "5"
    assert cell_text(5.25) == "5.25"
    assert cell_text(7) == "7"
    assert cell_text(" x ") == " x "


def test_column_mapping_flags():
    assert ColumnMapping("c", "c").is_combined
    assert not ColumnMapping("a", "b").is_combined
    assert ColumnMapping("a", "b").is_complete
    assert not ColumnMapping("", "b").is_complete


def test_column_mapping_from_untrusted_payload():
    assert ColumnMapping.from_dict({"latColumn": "Y", "lngColumn": "X"}) == ColumnMapping("Y", "X")
    assert ColumnMapping.from_dict({"lat_column": "Y", "lng_column": "X"}) == ColumnMapping("Y", "X")
    assert ColumnMapping.from_dict({"latColumn": "Y"}) is None
    assert ColumnMapping.from_dict({"latColumn": 1, "lngColumn": "X"}) is None
    assert ColumnMapping.from_dict("Y,X") is None
    assert ColumnMapping.from_dict(None) is None


def test_column_mapping_to_dict():
    assert ColumnMapping("Y", "X").to_dict() == {"latColumn": "Y", "lngColumn": "X"}


def test_point_copies_its_row():
    row = {"a": "1"}
    p = Point(1.0, 2.0, row)
    row["a"] = "changed"
    assert p.source_row["a"] == "1"
    assert hash(p) == hash(Point(1.0, 2.0, {"other": "x"}))


def test_style_config_defaults():
    cfg = StyleConfig()
    assert cfg.active_column is None and cfg.rule is None
    assert not cfg.is_active
    rule = StyleRule("k", {"a": "#fff000"})
    assert rule.color_for("a") == "#fff000"
    assert rule.color_for("b") is None
    assert StyleConfig("k", rule).is_active


def test_plot_result_counts():
    result = PlotResult(
        source="s.csv",
        headers=["lat", "lng"],
        rows=[{"lat": "1", "lng": "1"}, {"lat": "x", "lng": "1"}],
        mapping=ColumnMapping("lat", "lng"),
        points=[Point(1.0, 1.0, {"lat": "1", "lng": "1"})],
    )
    assert result.total_rows == 2
    assert result.plotted_rows == 1
    assert result.dropped_rows == 1
    assert result.style == StyleConfig()


def test_run_result_median_and_dropped():
    t = datetime(2024, 1, 1, tzinfo=UTC)
    stats = [
        SourceStat("a", "ok", 10, 8, 1.0),
        SourceStat("b", "ok", 5, 5, 3.0),
        SourceStat("c", "failed", 0, 0, 2.0, error="boom"),
    ]
    result = RunResult(2, 1, 15, 13, t, t, 6.0, source_stats=stats)
    assert result.dropped_rows == 2
    assert result.median_source_seconds == 2.0
    assert RunResult(0, 0, 0, 0, t, t, 0.0).median_source_seconds == 0.0
