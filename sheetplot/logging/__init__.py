"""Console logging setup and the JSON Lines reject log."""
