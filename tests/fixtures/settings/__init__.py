"""Fixture application settings."""
