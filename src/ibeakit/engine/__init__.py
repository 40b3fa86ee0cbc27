"""Algorithm engine."""
