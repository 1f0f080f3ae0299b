"""Fixture seeds."""
