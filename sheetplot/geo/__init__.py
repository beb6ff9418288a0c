"""Coordinate parsing and row-to-point resolution."""
