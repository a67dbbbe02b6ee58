"""Back-office authentication."""
