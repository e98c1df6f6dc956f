"""Dependency-aware work-order scheduling core."""

__version__ = "0.3.0"
