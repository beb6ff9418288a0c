"""Latitude/longitude column selection."""
