"""Copybin - clipboard history capture and persistence."""

__version__ = "0.1.0"
