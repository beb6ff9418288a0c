from __future__ import annotations

import pytest

from sheetplot.geo.parser import parse_coordinate


def test_plain_decimal():
    assert parse_coordinate("40.7128") == 40.7128
    assert parse_coordinate("  -74.0060 ") == -74.006


def test_european_decimal_comma():
    assert parse_coordinate("48,85") == 48.85


def test_comma_left_alone_when_period_present_or_repeated():
    # "1,234.5": comma + period -> comma stripped as noise
    assert parse_coordinate("1,234.5") == 1234.5
    # two commas: not a decimal comma, commas stripped
    assert parse_coordinate("48,85,12") == 488512.0


def test_hemisphere_markers_make_negative():
    assert parse_coordinate("S48.85") == -48.85
    assert parse_coordinate("74.0 W") == -74.0
    assert parse_coordinate("s 33.8688") == -33.8688  # upper-cased before the check


def test_north_east_markers_stay_positive():
    assert parse_coordinate("N40.7") == 40.7
    assert parse_coordinate("151.2E") == 151.2


def test_degree_symbol_and_letters_are_stripped():
    assert parse_coordinate("48.85°") == 48.85


def test_hemisphere_sign_wins_over_stray_minus():
    # the sign comes from the marker, not from minus signs left in the text
    assert parse_coordinate("S-33.5") == -33.5
    assert parse_coordinate("N -33.5") == 33.5


@pytest.mark.parametrize("raw", ["", "   ", "abc", "N", "-", ".", "--5"])
def test_rejected_inputs(raw):
    assert parse_coordinate(raw) is None


def test_leading_number_is_used_like_a_prefix_parse():
    assert parse_coordinate("12.5.3") == 12.5
    assert parse_coordinate("1-2") == 1.0


def test_zero_is_a_valid_number():
    # origin rejection happens in the point resolver, not in the parser
    assert parse_coordinate("0") == 0.0


def test_known_edge_case_s_or_w_inside_unrelated_text_flips_sign():
    """Heuristic limitation kept on purpose: any S/W in the text means negative."""
    assert parse_coordinate("West Dock 12") == -12.0
    assert parse_coordinate("Site 7") == -7.0
