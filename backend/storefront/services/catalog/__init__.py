"""Product taxonomy lookups."""
