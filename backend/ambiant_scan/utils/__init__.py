"""Shared helpers: cache store, coordinate grid, client IP handling."""
