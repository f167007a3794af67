"""Command-line layer for td."""
