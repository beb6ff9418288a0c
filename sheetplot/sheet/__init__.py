"""Tabular source adapters (CSV, Excel, Google Sheets)."""
