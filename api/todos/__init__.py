"""Owner-scoped todo lists and their embedded todos."""
