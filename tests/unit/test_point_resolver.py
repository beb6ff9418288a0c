from __future__ import annotations

import copy

import pytest

from sheetplot.geo.points import (
    classify_row,
    is_valid_position,
    rejected_rows,
    resolve_points,
    swap_mapping,
    update_mapping,
)
from sheetplot.models import ColumnMapping, Point, RejectedRow, RejectReason

DUAL = ColumnMapping(lat_column="lat", lng_column="lng")
COMBINED = ColumnMapping(lat_column="coords", lng_column="coords")


def test_dual_column_mode():
    rows = [
        {"name": "NYC", "lat": "40.7", "lng": "-74.0"},
        {"name": "Paris", "lat": "48,85", "lng": "2,35"},
    ]
    points = resolve_points(rows, DUAL)
    assert [(p.lat, p.lng) for p in points] == [(40.7, -74.0), (48.85, 2.35)]
    assert points[0].source_row["name"] == "NYC"


def test_combined_column_semicolon():
    points = resolve_points([{"coords": "40.7;-74.0"}], COMBINED)
    assert len(points) == 1
    assert points[0].lat == 40.7
    assert points[0].lng == -74.0


def test_combined_column_uses_first_two_parts_only():
    points = resolve_points([{"coords": "40.7,-74.0,extra"}], COMBINED)
    assert [(p.lat, p.lng) for p in points] == [(40.7, -74.0)]


def test_combined_column_with_single_part_is_skipped():
    assert resolve_points([{"coords": "40.7"}], COMBINED) == []
    outcome = classify_row({"coords": "40.7"}, COMBINED)
    assert isinstance(outcome, RejectedRow)
    assert outcome.reason is RejectReason.MALFORMED_COMBINED


def test_origin_is_dropped_even_though_both_parse():
    rows = [{"lat": "0", "lng": "0"}, {"lat": "0", "lng": "5"}]
    points = resolve_points(rows, DUAL)
    assert [(p.lat, p.lng) for p in points] == [(0.0, 5.0)]
    assert classify_row(rows[0], DUAL).reason is RejectReason.ORIGIN_SENTINEL


@pytest.mark.parametrize(
    "lat,lng",
    [("90.1", "0.5"), ("-91", "10"), ("45", "180.5"), ("45", "W181")],
)
def test_out_of_range_dropped(lat, lng):
    assert resolve_points([{"lat": lat, "lng": lng}], DUAL) == []


def test_boundaries_are_inclusive():
    points = resolve_points([{"lat": "90", "lng": "-180"}, {"lat": "S90", "lng": "180"}], DUAL)
    assert [(p.lat, p.lng) for p in points] == [(90.0, -180.0), (-90.0, 180.0)]


def test_absent_or_incomplete_mapping_gives_empty():
    rows = [{"lat": "1", "lng": "2"}]
    assert resolve_points(rows, None) == []
    assert resolve_points(rows, ColumnMapping("", "lng")) == []
    assert resolve_points(rows, ColumnMapping("lat", "")) == []


def test_empty_rows_give_empty():
    assert resolve_points([], DUAL) == []
    assert resolve_points([], COMBINED) == []


def test_order_preserved_and_dropped_rows_leave_no_gap():
    rows = [
        {"lat": "1", "lng": "1"},
        {"lat": "bad", "lng": "1"},
        {"lat": "2", "lng": "2"},
        {"lat": "", "lng": ""},
        {"lat": "3", "lng": "3"},
    ]
    assert [p.lat for p in resolve_points(rows, DUAL)] == [1.0, 2.0, 3.0]


def test_missing_cells_and_numeric_cells():
    rows = [{"lat": 12.5, "lng": 7}, {"lat": None, "lng": "1"}, {"other": "x"}]
    points = resolve_points(rows, DUAL)
    assert [(p.lat, p.lng) for p in points] == [(12.5, 7.0)]


def test_resolve_is_idempotent_and_does_not_mutate_inputs():
    rows = [{"lat": "40.7", "lng": "-74.0"}, {"lat": "x", "lng": "y"}]
    before = copy.deepcopy(rows)
    first = resolve_points(rows, DUAL)
    second = resolve_points(rows, DUAL)
    assert first == second
    assert rows == before


def test_point_source_row_is_read_only():
    point = resolve_points([{"lat": "1", "lng": "2"}], DUAL)[0]
    with pytest.raises(TypeError):
        point.source_row["lat"] = "9"  # type: ignore[index]


def test_rejected_rows_reasons():
    rows = [
        {"lat": "1", "lng": "1"},
        {"lat": "abc", "lng": "1"},
        {"lat": "1", "lng": "abc"},
        {"lat": "95", "lng": "1"},
    ]
    rejected = rejected_rows(rows, DUAL)
    assert [(r.row_index, r.reason) for r in rejected] == [
        (1, RejectReason.UNPARSEABLE_LAT),
        (2, RejectReason.UNPARSEABLE_LNG),
        (3, RejectReason.OUT_OF_RANGE),
    ]
    assert rejected[0].lat_raw == "abc"


def test_classify_row_without_mapping():
    outcome = classify_row({"lat": "1"}, None, index=4)
    assert outcome == RejectedRow(4, RejectReason.NO_MAPPING, "", "")


def test_classify_row_returns_point():
    assert isinstance(classify_row({"lat": "1", "lng": "2"}, DUAL), Point)


def test_is_valid_position():
    assert is_valid_position(10, 10)
    assert not is_valid_position(0, 0)
    assert not is_valid_position(-0.0, 0.0)
    assert not is_valid_position(91, 0)


def test_update_mapping_from_none_and_existing():
    m = update_mapping(None, "lat", "Y")
    assert m == ColumnMapping("Y", "")
    assert resolve_points([{"Y": "1"}], m) == []  # still inert
    m = update_mapping(m, "lng", "X")
    assert m == ColumnMapping("Y", "X")
    # choosing the same column for both selects combined-column mode
    assert update_mapping(m, "lng", "Y").is_combined


def test_update_mapping_rejects_unknown_axis():
    with pytest.raises(ValueError):
        update_mapping(DUAL, "alt", "z")  # type: ignore[arg-type]


def test_swap_mapping():
    assert swap_mapping(DUAL) == ColumnMapping("lng", "lat")
    assert swap_mapping(None) is None
    rows = [{"lat": "40.7", "lng": "-74.0"}]
    swapped = resolve_points(rows, swap_mapping(DUAL))
    assert [(p.lat, p.lng) for p in swapped] == [(-74.0, 40.7)]
