"""Errors and core value types."""
