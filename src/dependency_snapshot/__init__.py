"""Dependency snapshot extraction for resolved build graphs."""

__version__ = "0.3.0"
