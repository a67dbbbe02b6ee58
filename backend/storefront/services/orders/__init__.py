"""Order submission and persistence."""
