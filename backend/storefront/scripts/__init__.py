"""Administrative scripts."""
