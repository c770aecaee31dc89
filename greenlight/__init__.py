"""Greenlight: JSON API for managing a movie catalogue."""

__version__ = "1.0.0"
