"""Cluster glyph aggregation."""
