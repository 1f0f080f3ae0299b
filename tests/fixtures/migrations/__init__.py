"""Fixture migrations."""
