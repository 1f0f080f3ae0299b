"""Fixture authorization policies."""
