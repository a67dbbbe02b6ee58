"""Admin dashboard aggregation."""
