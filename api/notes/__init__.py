"""Owner-scoped notes."""
