"""Whoa application framework."""

__version__ = "1.0.0"
