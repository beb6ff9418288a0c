"""Service layer: source loading, external inference, sessions and export."""
