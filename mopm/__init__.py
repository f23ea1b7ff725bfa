"""Mopm — Manager Of Package Managers."""

__version__ = "0.0.1"
