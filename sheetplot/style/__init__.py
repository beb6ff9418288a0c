"""Categorical marker styling."""
