"""Structured logging setup and context."""
