"""Semantic highlighting tokens for Scala sources."""

__version__ = "0.1.0"
