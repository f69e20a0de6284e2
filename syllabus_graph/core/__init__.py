"""Core infrastructure: database access."""
